import datetime
from typing import List, Union

from gestor_financeiro.config import NOTIFICATION_DAYS_AHEAD
from gestor_financeiro.core.models import (
    Account,
    Notification,
    STATUS_OVERDUE,
    STATUS_PAID,
    STATUS_PENDING,
)
from gestor_financeiro.utils.text_utils import format_date, parse_date

# danger antes de warning antes de info
SEVERITY_ORDER = {"danger": 0, "warning": 1, "info": 2}


def days_until_due(account: Account, today: datetime.date) -> int:
    """Dias de calendário entre hoje e o vencimento (negativo se já venceu)."""
    return (parse_date(account.due_date, default=today) - today).days


def derive_status(account: Account, today: datetime.date) -> str:
    """
    Status efetivo de uma conta. Uma conta "Pendente" com vencimento antes de
    hoje é exibida como "Atrasado"; qualquer outro status é mantido como está.
    Nada é gravado de volta no banco.
    """
    if account.status == STATUS_PENDING and parse_date(account.due_date, default=today) < today:
        return STATUS_OVERDUE
    return account.status


def apply_effective_status(accounts: List[Account], today: datetime.date) -> List[Account]:
    """Cópias das contas com o status efetivo de `today`; a lista original não muda."""
    return [account.copy(status=derive_status(account, today)) for account in accounts]


def _notification_for(account: Account, today: datetime.date, days_ahead: int) -> Union[Notification, None]:
    status = derive_status(account, today)
    if status == STATUS_PAID:
        return None

    days = days_until_due(account, today)
    if status == STATUS_OVERDUE or days < 0:
        return Notification(
            id=f"overdue-{account.id}",
            type="danger",
            title="Conta Atrasada",
            message=f"{account.company_name} - Venceu em {format_date(account.due_date)}",
            account_id=account.id,
        )
    if days == 0:
        return Notification(
            id=f"today-{account.id}",
            type="warning",
            title="Vence Hoje",
            message=f"{account.company_name} - R$ {float(account.installment_value):.2f}",
            account_id=account.id,
        )
    if days <= days_ahead:
        return Notification(
            id=f"soon-{account.id}",
            type="info",
            title=f"Vence em {days} dia{'s' if days > 1 else ''}",
            message=f"{account.company_name} - {format_date(account.due_date)}",
            account_id=account.id,
        )
    return None


def build_notifications(
    accounts: List[Account],
    today: datetime.date,
    sort_by_due_date: bool = False,
    days_ahead: int = NOTIFICATION_DAYS_AHEAD,
) -> List[Notification]:
    """
    Avisos de vencimento: atrasadas (danger), vencendo hoje (warning) e
    vencendo nos próximos `days_ahead` dias (info), nessa ordem.

    Dentro da mesma severidade a ordem de entrada é mantida; com
    `sort_by_due_date=True` o desempate é pelo vencimento mais próximo.
    """
    pairs = []
    for account in accounts:
        notification = _notification_for(account, today, days_ahead)
        if notification:
            pairs.append((notification, account))

    if sort_by_due_date:
        pairs.sort(key=lambda p: (SEVERITY_ORDER[p[0].type], parse_date(p[1].due_date, default=today)))
    else:
        pairs.sort(key=lambda p: SEVERITY_ORDER[p[0].type])
    return [notification for notification, _ in pairs]
