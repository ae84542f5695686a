"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class RateLookupError(DomainException):
    """No desgravamen rate tabulated for the institution/age/amount/installments"""

    def __init__(self, institution: str, installments: int):
        self.institution = institution
        self.installments = installments
        super().__init__(f"No rate data available for {institution} with {installments} installments.")


class CesantiaLookupError(DomainException):
    """Institution missing from the unemployment insurance table"""

    def __init__(self, institution: str):
        self.institution = institution
        super().__init__(f"No unemployment insurance data available for {institution}.")


class InvalidCalculationInputError(DomainException):
    """Calculation inputs are out of range or inconsistent"""

    pass


class RateTableError(DomainException):
    """Rate table document is unreadable or malformed"""

    pass


class RefundAdminAPIError(DomainException):
    """Refund admin API returned an error or is unavailable"""

    pass


class RefundNotFoundError(DomainException):
    """Refund request does not exist in the admin API"""

    pass
