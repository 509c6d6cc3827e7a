from typing import Any, Dict, Optional

from gestor_financeiro.utils.text_utils import company_initials

# Valores de status gravados na coluna `status` da tabela accounts
STATUS_PENDING = "Pendente"
STATUS_PAID = "Pago"
STATUS_OVERDUE = "Atrasado"
ACCOUNT_STATUSES = (STATUS_PENDING, STATUS_PAID, STATUS_OVERDUE)

DEFAULT_CATEGORY = "Outros"
DOWN_PAYMENT_LABEL = "Entrada"

ACCOUNT_CATEGORIES = [
    "Fornecedores",
    "Serviços",
    "Impostos",
    "Aluguel",
    "Salários",
    "Utilities",
    "Marketing",
    "Equipamentos",
    "Outros",
]

INCOME_CATEGORIES = ["Salário", "Freelance", "Investimentos", "Vendas", "Outros"]

VOUCHER_TYPES = ("purchase", "voucher")


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class Account:
    """Uma parcela (ou a entrada) de uma conta a pagar."""

    def __init__(
        self,
        id: Optional[str],
        company_name: str,
        total_value: float,
        installments: str,
        installment_value: float,
        due_date: str,
        status: str = STATUS_PENDING,
        category: Optional[str] = None,
        initials: Optional[str] = None,
    ):
        self.id = id
        self.company_name = company_name
        self.company_initials = initials or company_initials(company_name)
        self.total_value = total_value
        self.installments = installments
        self.installment_value = installment_value
        self.due_date = due_date
        self.status = status
        self.category = category or DEFAULT_CATEGORY

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Account":
        """Monta uma conta a partir de uma linha da tabela `accounts`."""
        return cls(
            id=row.get("id"),
            company_name=row.get("company_name") or "",
            total_value=_to_float(row.get("total_value")),
            installments=row.get("installments") or "",
            installment_value=_to_float(row.get("installment_value")),
            due_date=row.get("due_date") or "",
            status=row.get("status") or STATUS_PENDING,
            category=row.get("category"),
            initials=row.get("company_initials"),
        )

    def to_row(self, user_id: Optional[str] = None) -> Dict[str, Any]:
        row = {
            "company_name": self.company_name,
            "company_initials": self.company_initials,
            "total_value": self.total_value,
            "installments": self.installments,
            "installment_value": self.installment_value,
            "due_date": self.due_date,
            "status": self.status,
            "category": self.category,
        }
        if user_id is not None:
            row["user_id"] = user_id
        return row

    def copy(self, **changes: Any) -> "Account":
        data = dict(self.__dict__)
        data.update(changes)
        clone = Account.__new__(Account)
        clone.__dict__.update(data)
        return clone

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Account) and self.__dict__ == other.__dict__

    def __repr__(self) -> str:
        return (
            f"Account(id={self.id!r}, company_name={self.company_name!r}, "
            f"installments={self.installments!r}, due_date={self.due_date!r}, "
            f"status={self.status!r})"
        )


class Income:
    def __init__(
        self,
        id: Optional[str],
        description: str,
        value: float,
        date: str,
        category: str = DEFAULT_CATEGORY,
        received: bool = False,
    ):
        self.id = id
        self.description = description
        self.value = value
        self.date = date
        self.category = category or DEFAULT_CATEGORY
        self.received = received

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Income":
        return cls(
            id=row.get("id"),
            description=row.get("description") or "",
            value=_to_float(row.get("value")),
            date=row.get("date") or "",
            category=row.get("category"),
            received=bool(row.get("received")),
        )

    def to_row(self, user_id: Optional[str] = None) -> Dict[str, Any]:
        row = {
            "description": self.description,
            "value": self.value,
            "date": self.date,
            "category": self.category,
            "received": self.received,
        }
        if user_id is not None:
            row["user_id"] = user_id
        return row

    def __repr__(self) -> str:
        return f"Income(id={self.id!r}, description={self.description!r}, value={self.value!r})"


class PurchaseVoucher:
    """Lançamento avulso de compra (`purchase`) ou vale (`voucher`)."""

    def __init__(
        self,
        id: Optional[str],
        type: str,
        description: str,
        amount: float,
        date: str,
        created_at: Optional[str] = None,
    ):
        self.id = id
        self.type = type
        self.description = description
        self.amount = amount
        self.date = date
        self.created_at = created_at

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "PurchaseVoucher":
        return cls(
            id=row.get("id"),
            type=row.get("type") or "purchase",
            description=row.get("description") or "",
            amount=_to_float(row.get("amount")),
            date=row.get("date") or "",
            created_at=row.get("created_at"),
        )

    def to_row(self, user_id: Optional[str] = None) -> Dict[str, Any]:
        row = {
            "type": self.type,
            "description": self.description,
            "amount": self.amount,
            "date": self.date,
        }
        if user_id is not None:
            row["user_id"] = user_id
        return row


class Notification:
    def __init__(self, id: str, type: str, title: str, message: str, account_id: Optional[str] = None):
        self.id = id
        self.type = type  # "danger" | "warning" | "info"
        self.title = title
        self.message = message
        self.account_id = account_id

    def __repr__(self) -> str:
        return f"Notification(id={self.id!r}, type={self.type!r}, title={self.title!r})"


class DbResult:
    """Resultado de uma chamada ao Supabase: sucesso ou falha com o motivo."""

    def __init__(self, ok: bool, data: Any = None, error: Optional[str] = None):
        self.ok = ok
        self.data = data
        self.error = error

    @classmethod
    def success(cls, data: Any = None) -> "DbResult":
        return cls(True, data=data)

    @classmethod
    def failure(cls, error: str) -> "DbResult":
        return cls(False, error=error)

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        return f"DbResult(ok={self.ok!r}, error={self.error!r})"
