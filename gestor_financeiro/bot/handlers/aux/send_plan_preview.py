import datetime
from typing import Any, Dict

from telegram import ReplyKeyboardMarkup, Update
from telegram.helpers import escape_markdown
from telegram.ext import ContextTypes

from gestor_financeiro.core.installments import generate_plan
from gestor_financeiro.utils.text_utils import format_currency, format_date


async def send_plan_preview(update: Update, context: ContextTypes.DEFAULT_TYPE, pending_account: Dict[str, Any]) -> None:
    """Mostra as parcelas que serão criadas e pede confirmação (Sim/Não)."""
    rows = generate_plan(
        total_value=pending_account["total_value"],
        first_due_date=pending_account["first_due_date"],
        installment_count=pending_account["installment_count"],
        down_payment=pending_account.get("down_payment", 0.0),
        company_name=pending_account["company_name"],
        category=pending_account.get("category"),
        today=datetime.date.today(),
    )

    message_text = (
        f"Confirma a *conta*? 🧾\n"
        f"🏢 Empresa: *{escape_markdown(pending_account['company_name'], version=1)}*\n"
        f"💰 Valor total: *{format_currency(pending_account['total_value'])}*\n"
        f"🏷️ Categoria: *{escape_markdown(rows[0].category, version=1)}*\n\n"
        "*Parcelas:*\n"
    )
    for row in rows:
        message_text += (
            f"• {row.installments}: {format_currency(row.installment_value)} "
            f"em {format_date(row.due_date)} ({row.status})\n"
        )

    keyboard = [["Sim ✅", "Não ❌"]]
    reply_markup = ReplyKeyboardMarkup(keyboard, one_time_keyboard=True, resize_keyboard=True)
    await update.message.reply_text(f"{message_text}\n*Tudo certo?* 🤔", reply_markup=reply_markup, parse_mode="Markdown")
