"""Ledger error taxonomy.

Every failure raised inside the core is a LedgerError subclass carrying a
stable code and an ErrorKind; the operation boundary turns them into
ActionResult failures.
"""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    BUSINESS_RULE = "business_rule"
    PERSISTENCE = "persistence"
    UNKNOWN = "unknown"


class LedgerError(Exception):
    kind = ErrorKind.UNKNOWN
    code = "UNKNOWN"
    default_message = "Ocurrió un error inesperado."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ---- Validation ----

class ValidationError(LedgerError):
    kind = ErrorKind.VALIDATION
    code = "VALIDATION"
    default_message = "Datos inválidos."


class InvalidInputError(ValidationError):
    code = "INVALID_INPUT"


class InvalidInstallmentError(ValidationError):
    code = "INVALID_INSTALLMENT"
    default_message = "Número de cuota fuera del plan."


# ---- Not found ----

class NotFoundError(LedgerError):
    kind = ErrorKind.NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Recurso no encontrado."


class AccountNotFoundError(NotFoundError):
    code = "ACCOUNT_NOT_FOUND"
    default_message = "Cuenta no encontrada"


class PaymentNotFoundError(NotFoundError):
    code = "PAYMENT_NOT_FOUND"
    default_message = "Pago no encontrado"


class MissingAccountError(NotFoundError):
    code = "MISSING_ACCOUNT"
    default_message = "El pago no tiene una cuenta corriente asociada."


class MissingAccountIdError(NotFoundError):
    code = "MISSING_ACCOUNT_ID"
    default_message = "El pago no tiene identificador de cuenta corriente."


# ---- Business rules ----

class BusinessRuleError(LedgerError):
    kind = ErrorKind.BUSINESS_RULE
    code = "BUSINESS_RULE"


class InstallmentAlreadyPaidError(BusinessRuleError):
    code = "INSTALLMENT_ALREADY_PAID"
    default_message = "La cuota ya fue pagada."


class ScheduleExhaustedError(BusinessRuleError):
    code = "SCHEDULE_EXHAUSTED"
    default_message = "Todas las cuotas del plan ya tienen un pago registrado."


class AlreadyAnnulledError(BusinessRuleError):
    code = "ALREADY_ANNULLED"
    default_message = "El pago ya forma parte de una anulación."


class PendingPaymentError(BusinessRuleError):
    code = "PENDING_PAYMENT"
    default_message = "La cuota pendiente no tiene un pago que anular."


class AccountPaidOffError(BusinessRuleError):
    code = "ACCOUNT_PAID_OFF"
    default_message = "Esta cuenta corriente ya ha sido saldada."


# ---- Infrastructure ----

class PersistenceError(LedgerError):
    kind = ErrorKind.PERSISTENCE
    code = "PERSISTENCE"
    default_message = "Error de base de datos."


class UnknownError(LedgerError):
    pass
