import datetime

from telegram import Update
from telegram.helpers import escape_markdown
from telegram.ext import ContextTypes

from gestor_financeiro.bot.commands.utils import load_book, reply_db_error
from gestor_financeiro.core import reports
from gestor_financeiro.utils.text_utils import (
    format_currency,
    format_date,
    month_label,
    parse_amount,
    parse_year_month,
    today_string,
)

# Palavra digitada no comando -> tipo gravado na tabela
VOUCHER_KINDS = {"compra": "purchase", "vale": "voucher"}


async def vouchers_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Compras e vales de um mês: /compras [AAAA-MM]."""
    today = datetime.date.today()
    year, month = parse_year_month(context.args[0] if context.args else None, today)
    book, result = load_book(context, today)
    if not result.ok:
        await reply_db_error(update, result)
        return

    summary = reports.voucher_summary(book.vouchers, year, month)
    if not summary["vouchers"]:
        await update.message.reply_text(f"Nenhuma compra ou vale em {month_label(year, month)}.")
        return

    message = f"**Compras e vales de {month_label(year, month)}:**\n\n"
    for voucher in summary["vouchers"]:
        kind = "🛒 Compra" if voucher.type == "purchase" else "🎟️ Vale"
        message += (
            f"{kind} `{voucher.id}`: {escape_markdown(voucher.description, version=1)} - "
            f"{format_currency(voucher.amount)} em {format_date(voucher.date)}\n"
        )
    message += (
        f"\nCompras: {format_currency(summary['purchases'])}\n"
        f"Vales: {format_currency(summary['vouchers_total'])}\n"
        f"**Total: {format_currency(summary['total'])}**"
    )
    await update.message.reply_text(message, parse_mode="Markdown")


async def add_voucher_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Registra uma compra ou vale com a data de hoje: /nova_compra [compra|vale] [valor] [descrição]."""
    if not context.args or len(context.args) < 3:
        await update.message.reply_text(
            "Uso: `/nova_compra [compra|vale] [valor] [descrição]`\nEx: `/nova_compra vale 40 Adiantamento`"
        )
        return

    voucher_type = VOUCHER_KINDS.get(context.args[0].lower())
    if not voucher_type:
        await update.message.reply_text("O tipo precisa ser `compra` ou `vale`.")
        return

    amount = parse_amount(context.args[1])
    if amount is None or amount <= 0:
        await update.message.reply_text("O valor precisa ser um número maior que zero. Ex: `40` ou `18,50`.")
        return

    description = " ".join(context.args[2:]).strip()
    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    result = book.add_voucher(voucher_type, description, amount, today_string())
    if result.ok:
        await update.message.reply_text(
            f"✅ {context.args[0].capitalize()} de {format_currency(amount)} ('{description}') registrada!"
        )
    else:
        await reply_db_error(update, result)


async def delete_voucher_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not context.args:
        await update.message.reply_text("Uso: `/excluir_compra [id]`")
        return

    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    voucher = book.find_voucher(context.args[0])
    if not voucher:
        await update.message.reply_text(f"Lançamento `{context.args[0]}` não encontrado. Use `/compras` para ver os ids.")
        return

    result = book.delete_voucher(voucher.id)
    if result.ok:
        await update.message.reply_text(f"🗑️ Lançamento '{voucher.description}' excluído.")
    else:
        await reply_db_error(update, result)
