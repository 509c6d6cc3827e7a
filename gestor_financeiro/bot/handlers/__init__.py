# --- Estados da Conversa de /nova_conta ---
ASKING_COMPANY = 0
ASKING_TOTAL = 1
ASKING_DOWN_PAYMENT = 2
ASKING_INSTALLMENTS = 3
ASKING_DUE_DATE = 4
ASKING_CATEGORY = 5
ASKING_CONFIRMATION = 6

from .handle_new_account import (  # noqa: E402
    cancel_new_account,
    handle_category,
    handle_company,
    handle_down_payment,
    handle_due_date,
    handle_installments,
    handle_total,
    start_new_account,
)
from .handle_confirmation import handle_confirmation  # noqa: E402
