class DomainError(Exception):
    """Base class for payroll rule violations."""


class ValidationError(DomainError):
    """Bad input: malformed salary data, invalid or future payroll period, missing payslip."""


class AuthorizationError(DomainError):
    """The caller may not perform this payroll action."""
