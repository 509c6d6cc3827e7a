import datetime
import re
from typing import Any, Union

MONTH_NAMES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]


def company_initials(company_name: str) -> str:
    """Primeiras duas letras do nome da empresa, em maiúsculas. Ex: "Acme Corp" -> "AC"."""
    if not company_name:
        return ""
    return company_name.strip()[:2].upper()


def parse_date(value: Any, default: Union[datetime.date, None] = None) -> datetime.date:
    """Converte `AAAA-MM-DD` (ou date/datetime) em uma data de calendário local.

    A string é lida como data local, nunca como timestamp UTC, para não
    deslocar o dia. Entradas inválidas devolvem `default` (ou hoje).
    """
    fallback = default or datetime.date.today()
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not value or not isinstance(value, str):
        return fallback

    parts = value.strip()[:10].split("-")
    if len(parts) != 3:
        return fallback
    try:
        year, month, day = (int(p) for p in parts)
        return datetime.date(year, month, day)
    except ValueError:
        return fallback


def today_string(today: Union[datetime.date, None] = None) -> str:
    return (today or datetime.date.today()).strftime("%Y-%m-%d")


def format_date(value: Any) -> str:
    """Formata `AAAA-MM-DD` como `dd/mm/aaaa`; '-' quando vazio."""
    if not value:
        return "-"
    if isinstance(value, str):
        parts = value.split("-")
        if len(parts) != 3:
            return value
        try:
            return datetime.date(*(int(p) for p in parts)).strftime("%d/%m/%Y")
        except ValueError:
            return value
    return parse_date(value).strftime("%d/%m/%Y")


def format_currency(value: Any) -> str:
    """
    Formata valores em BRL (R$ 1.234,56). Valores inválidos viram 0,00
    e negativos recebem o prefixo '-'.
    """
    try:
        val = float(value)
    except (ValueError, TypeError):
        val = 0.0

    s = f"{abs(val):,.2f}"
    s = s.replace(",", "X").replace(".", ",").replace("X", ".")
    prefix = "-" if val < 0 else ""
    return f"{prefix}R$ {s}"


def parse_amount(text: Any) -> Union[float, None]:
    """Lê um valor digitado pelo usuário: "1200", "1.200,50", "R$ 18,50", "18.5"."""
    if isinstance(text, (int, float)):
        return float(text)
    if not text or not isinstance(text, str):
        return None

    cleaned = re.sub(r"[^0-9,.\-]", "", text)
    if not cleaned:
        return None
    if "," in cleaned or re.fullmatch(r"-?\d{1,3}(\.\d{3})+", cleaned):
        # formato brasileiro: ponto de milhar, vírgula decimal
        cleaned = cleaned.replace(".", "").replace(",", ".")
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_year_month(text: Union[str, None], today: Union[datetime.date, None] = None):
    """Converte `AAAA-MM` em (ano, mês). Vazio ou inválido -> mês de `today`."""
    today = today or datetime.date.today()
    if text:
        try:
            parsed = datetime.datetime.strptime(text.strip(), "%Y-%m")
            return parsed.year, parsed.month
        except ValueError:
            pass
    return today.year, today.month


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]}/{year}"


def parse_user_date(text: Union[str, None]) -> Union[datetime.date, None]:
    """Data digitada pelo usuário: `dd/mm/aaaa` ou `AAAA-MM-DD`. None se inválida."""
    if not text:
        return None
    for fmt in ("%d/%m/%Y", "%Y-%m-%d"):
        try:
            return datetime.datetime.strptime(text.strip(), fmt).date()
        except ValueError:
            continue
    return None
