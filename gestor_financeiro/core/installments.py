import calendar
import datetime
from typing import Any, List, Union

from gestor_financeiro.core.models import (
    Account,
    DEFAULT_CATEGORY,
    DOWN_PAYMENT_LABEL,
    STATUS_PAID,
    STATUS_PENDING,
)
from gestor_financeiro.utils.text_utils import parse_date, today_string


def parse_installment_count(value: Any) -> int:
    """
    Número de parcelas informado pelo usuário. Aceita 4, "4" ou o rótulo
    do formulário "1 / 4". Ausente, inválido, zero ou negativo vira 1.
    """
    if isinstance(value, str) and "/" in value:
        value = value.split("/")[-1]
    try:
        count = int(value) if isinstance(value, (int, float)) else int(str(value).strip())
    except (TypeError, ValueError, OverflowError):
        return 1
    return count if count >= 1 else 1


def add_months(start: datetime.date, months: int) -> datetime.date:
    """Soma meses mantendo o dia; se o dia não existe no mês alvo, usa o último dia dele."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last = calendar.monthrange(year, month)[1]
    return datetime.date(year, month, min(start.day, last))


def compute_installment_value(total_value: float, down_payment: float, installment_count: Any) -> float:
    return (float(total_value) - float(down_payment or 0)) / parse_installment_count(installment_count)


def installment_label(index: int, installment_count: int) -> str:
    return f"{index + 1} / {installment_count}"


def generate_plan(
    total_value: float,
    first_due_date: Union[str, datetime.date],
    installment_count: Any = 1,
    down_payment: float = 0.0,
    company_name: str = "",
    category: Union[str, None] = None,
    installment_value: Union[float, None] = None,
    today: Union[datetime.date, None] = None,
) -> List[Account]:
    """
    Gera as linhas de uma conta parcelada, prontas para um único insert em lote.

    - Se houver entrada, a primeira linha é "Entrada", já paga, com vencimento
      na data de criação (`today`), fora da contagem de parcelas.
    - As parcelas vencem no mesmo dia a cada mês a partir de `first_due_date`,
      limitado ao último dia do mês (31/01 -> 29/02 -> 31/03).
    - `installment_value` substitui o valor calculado quando o usuário o editou
      manualmente; por padrão é (total - entrada) / parcelas, sem distribuir
      sobras de arredondamento.
    """
    today = today or datetime.date.today()
    count = parse_installment_count(installment_count)
    down_payment = float(down_payment or 0)
    category = category if category and category.strip() else DEFAULT_CATEGORY
    start = parse_date(first_due_date, default=today)

    if installment_value is None:
        installment_value = compute_installment_value(total_value, down_payment, count)

    rows = []
    if down_payment > 0:
        rows.append(
            Account(
                id=None,
                company_name=company_name,
                total_value=total_value,
                installments=DOWN_PAYMENT_LABEL,
                installment_value=down_payment,
                due_date=today_string(today),
                status=STATUS_PAID,
                category=category,
            )
        )

    for i in range(count):
        rows.append(
            Account(
                id=None,
                company_name=company_name,
                total_value=total_value,
                installments=installment_label(i, count),
                installment_value=installment_value,
                due_date=add_months(start, i).strftime("%Y-%m-%d"),
                status=STATUS_PENDING,
                category=category,
            )
        )
    return rows
