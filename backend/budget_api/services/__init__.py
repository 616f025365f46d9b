"""Services — imperative shell: repositories, currency conversion, route orchestration."""
