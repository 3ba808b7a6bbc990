"""Exceptions raised by the verification layer. Scoring itself never raises."""


class GreenScoreError(Exception):
    """Base class for green loan scoring errors."""


class LoanNotFoundError(GreenScoreError):
    def __init__(self, loan_id):
        self.loan_id = loan_id
        super().__init__(f"Loan not found: {loan_id}")


class LoanAlreadyDecidedError(GreenScoreError):
    """Raised when re-verification of a decided loan is disabled."""

    def __init__(self, loan_id, status):
        self.loan_id = loan_id
        self.status = status
        super().__init__(f"Loan {loan_id} is already {status}")
