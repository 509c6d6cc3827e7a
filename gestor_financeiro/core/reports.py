import datetime
import math
from typing import Any, Dict, List, Tuple, Union

import pandas as pd

from gestor_financeiro.config import ITEMS_PER_PAGE
from gestor_financeiro.core.models import (
    Account,
    Income,
    PurchaseVoucher,
    ACCOUNT_STATUSES,
    STATUS_OVERDUE,
    STATUS_PAID,
)

ACCOUNT_COLUMNS = ["id", "company_name", "installment_value", "due_date", "status", "category"]
INCOME_COLUMNS = ["id", "value", "date", "received"]


def _accounts_frame(accounts: List[Account]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{col: getattr(acc, col) for col in ACCOUNT_COLUMNS} for acc in accounts],
        columns=ACCOUNT_COLUMNS,
    )
    df["installment_value"] = pd.to_numeric(df["installment_value"], errors="coerce").fillna(0.0)
    df["due_date"] = pd.to_datetime(df["due_date"], format="%Y-%m-%d", errors="coerce")
    return df


def _incomes_frame(incomes: List[Income]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{col: getattr(inc, col) for col in INCOME_COLUMNS} for inc in incomes],
        columns=INCOME_COLUMNS,
    )
    df["value"] = pd.to_numeric(df["value"], errors="coerce").fillna(0.0)
    df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
    return df


def _in_month(dates: pd.Series, year: int, month: int) -> pd.Series:
    return (dates.dt.year == year) & (dates.dt.month == month)


def dashboard_stats(accounts: List[Account], incomes: List[Income], today: datetime.date) -> Dict[str, float]:
    """
    Cartões do painel:
    - total_open: parcelas não pagas
    - due_this_week: não pagas vencendo de hoje até hoje + 7 dias
    - total_overdue: parcelas atrasadas
    - total_income: soma de todas as entradas
    """
    acc_df = _accounts_frame(accounts)
    inc_df = _incomes_frame(incomes)

    start = pd.Timestamp(today)
    end = start + pd.Timedelta(days=7)
    unpaid = acc_df[acc_df["status"] != STATUS_PAID]
    this_week = unpaid[(unpaid["due_date"] >= start) & (unpaid["due_date"] <= end)]

    return {
        "total_open": float(unpaid["installment_value"].sum()),
        "due_this_week": float(this_week["installment_value"].sum()),
        "total_overdue": float(acc_df.loc[acc_df["status"] == STATUS_OVERDUE, "installment_value"].sum()),
        "total_income": float(inc_df["value"].sum()),
    }


def status_totals(accounts: List[Account]) -> Dict[str, float]:
    """Soma dos valores das parcelas por status (Pendente, Pago, Atrasado)."""
    df = _accounts_frame(accounts)
    grouped = df.groupby("status")["installment_value"].sum()
    return {status: float(grouped.get(status, 0.0)) for status in ACCOUNT_STATUSES}


def monthly_report(accounts: List[Account], incomes: List[Income], year: int, month: int) -> Dict[str, Any]:
    """Relatório do mês: contas que vencem e entradas com data no mês, com os totais."""
    acc_df = _accounts_frame(accounts)
    inc_df = _incomes_frame(incomes)

    acc_mask = _in_month(acc_df["due_date"], year, month)
    inc_mask = _in_month(inc_df["date"], year, month)
    month_accounts = [acc for acc, keep in zip(accounts, acc_mask.tolist()) if keep]
    month_incomes = [inc for inc, keep in zip(incomes, inc_mask.tolist()) if keep]

    month_acc_df = acc_df[acc_mask]
    total_income = float(inc_df.loc[inc_mask, "value"].sum())
    total_expense = float(month_acc_df["installment_value"].sum())
    total_paid = float(month_acc_df.loc[month_acc_df["status"] == STATUS_PAID, "installment_value"].sum())

    return {
        "accounts": month_accounts,
        "incomes": month_incomes,
        "total_income": total_income,
        "total_expense": total_expense,
        "total_paid": total_paid,
        "total_pending": total_expense - total_paid,
        "net_profit": total_income - total_expense,
    }


def filter_accounts(
    accounts: List[Account],
    search_term: str = "",
    status: Union[str, None] = None,
    category: Union[str, None] = None,
) -> List[Account]:
    """Filtros do painel: busca por empresa/categoria, status e categoria exatos."""
    filtered = accounts
    if search_term:
        term = search_term.lower()
        filtered = [
            acc for acc in filtered
            if term in acc.company_name.lower() or term in (acc.category or "").lower()
        ]
    if status:
        filtered = [acc for acc in filtered if acc.status == status]
    if category:
        filtered = [acc for acc in filtered if acc.category == category]
    return filtered


def paginate(items: List[Any], page: int = 1, per_page: int = ITEMS_PER_PAGE) -> Tuple[List[Any], int, int]:
    """Retorna (itens da página, total de páginas, página efetiva)."""
    total_pages = math.ceil(len(items) / per_page) if items else 0
    page = max(1, min(page, total_pages or 1))
    start = (page - 1) * per_page
    return items[start:start + per_page], total_pages, page


def group_by_status(accounts: List[Account]) -> Dict[str, List[Account]]:
    """Colunas do quadro kanban, na ordem Pendente, Atrasado, Pago."""
    columns = {status: [] for status in (ACCOUNT_STATUSES[0], STATUS_OVERDUE, STATUS_PAID)}
    for acc in accounts:
        if acc.status in columns:
            columns[acc.status].append(acc)
    return columns


def voucher_summary(vouchers: List[PurchaseVoucher], year: int, month: int) -> Dict[str, Any]:
    """Compras e vales do mês (mais recentes primeiro) e os totais por tipo."""
    df = pd.DataFrame(
        [{"position": i, "type": v.type, "amount": v.amount, "date": v.date} for i, v in enumerate(vouchers)],
        columns=["position", "type", "amount", "date"],
    )
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0)
    df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
    df = df[_in_month(df["date"], year, month)].sort_values("date", ascending=False, kind="stable")

    purchases = float(df.loc[df["type"] == "purchase", "amount"].sum())
    total = float(df["amount"].sum())
    return {
        "vouchers": [vouchers[int(i)] for i in df["position"]],
        "purchases": purchases,
        "vouchers_total": total - purchases,
        "total": total,
    }
