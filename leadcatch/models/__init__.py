from leadcatch.models.credit import Credit
from leadcatch.models.credit_transaction import CreditTransaction
from leadcatch.models.form_definition import FormDefinition
from leadcatch.models.sms_log import SmsLog
from leadcatch.models.submission import Submission
from leadcatch.models.tenant import Tenant

__all__ = [
    "Credit",
    "CreditTransaction",
    "FormDefinition",
    "SmsLog",
    "Submission",
    "Tenant",
]
