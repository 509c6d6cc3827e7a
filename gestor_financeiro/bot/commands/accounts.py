import datetime

from telegram import Update
from telegram.helpers import escape_markdown
from telegram.ext import ContextTypes

from gestor_financeiro.bot.commands.utils import (
    SEVERITY_EMOJI,
    format_account_line,
    load_book,
    reply_db_error,
)
from gestor_financeiro.core import reports
from gestor_financeiro.core.models import ACCOUNT_STATUSES, STATUS_PAID
from gestor_financeiro.utils.text_utils import parse_amount, parse_user_date


async def list_accounts_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Lista as parcelas com o status efetivo de hoje, paginadas."""
    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    if not book.accounts:
        await update.message.reply_text(
            "Você ainda não tem contas cadastradas. Use `/nova_conta` para começar."
        )
        return

    # /contas [página] [Pendente|Pago|Atrasado|busca]
    page, status, terms = 1, None, []
    for arg in context.args or []:
        if arg.isdigit():
            page = int(arg)
        elif arg.capitalize() in ACCOUNT_STATUSES:
            status = arg.capitalize()
        else:
            terms.append(arg)

    accounts = reports.filter_accounts(book.accounts, search_term=" ".join(terms), status=status)
    if not accounts:
        await update.message.reply_text("Nenhuma conta encontrada com esses filtros.")
        return
    items, total_pages, page = reports.paginate(accounts, page)

    message = f"**Suas contas (página {page}/{total_pages}):**\n\n"
    message += "\n".join(format_account_line(acc) for acc in items)
    await update.message.reply_text(message, parse_mode="Markdown")


async def notifications_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Mostra os avisos de vencimento, atrasadas primeiro."""
    today = datetime.date.today()
    book, result = load_book(context, today)
    if not result.ok:
        await reply_db_error(update, result)
        return

    notifications = book.notifications(today)
    if not notifications:
        await update.message.reply_text("🎉 Nenhuma conta atrasada ou vencendo nos próximos dias!")
        return

    message = "**Avisos:**\n\n"
    for notification in notifications:
        emoji = SEVERITY_EMOJI.get(notification.type, "🔔")
        message += f"{emoji} *{notification.title}*: {escape_markdown(notification.message, version=1)}\n"
    await update.message.reply_text(message, parse_mode="Markdown")


async def _change_status(update: Update, context: ContextTypes.DEFAULT_TYPE, account_id: str, status: str) -> None:
    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    account = book.find_account(account_id)
    if not account:
        await update.message.reply_text(f"Conta `{account_id}` não encontrada. Use `/contas` para ver os ids.")
        return

    result = book.change_status(account.id, status)
    if result.ok:
        await update.message.reply_text(
            f"✅ {escape_markdown(account.company_name, version=1)} ({account.installments}) agora está como *{status}*.",
            parse_mode="Markdown",
        )
    else:
        await reply_db_error(update, result)


async def pay_account_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Marca uma parcela como paga."""
    if not context.args:
        await update.message.reply_text("Uso: `/pagar [id_da_conta]`")
        return
    await _change_status(update, context, context.args[0], STATUS_PAID)


async def set_status_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Altera o status de uma parcela para Pendente, Pago ou Atrasado."""
    if not context.args or len(context.args) < 2:
        await update.message.reply_text("Uso: `/status [id_da_conta] [Pendente|Pago|Atrasado]`")
        return

    status = context.args[1].capitalize()
    if status not in ACCOUNT_STATUSES:
        await update.message.reply_text(f"Status inválido. Use um destes: {', '.join(ACCOUNT_STATUSES)}.")
        return
    await _change_status(update, context, context.args[0], status)


async def delete_account_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Exclui uma única parcela."""
    if not context.args:
        await update.message.reply_text("Uso: `/excluir_conta [id_da_conta]`")
        return

    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    account = book.find_account(context.args[0])
    if not account:
        await update.message.reply_text(f"Conta `{context.args[0]}` não encontrada.")
        return

    result = book.delete_account(account.id)
    if result.ok:
        await update.message.reply_text(
            f"🗑️ Parcela {account.installments} de {account.company_name} excluída."
        )
    else:
        await reply_db_error(update, result)


# Campo digitado no /editar_conta -> coluna da tabela accounts
EDITABLE_FIELDS = {
    "empresa": "company_name",
    "valor": "installment_value",
    "vencimento": "due_date",
    "categoria": "category",
}


async def edit_account_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Edita uma única parcela: /editar_conta [id] [empresa|valor|vencimento|categoria] [novo valor]."""
    if not context.args or len(context.args) < 3:
        await update.message.reply_text(
            "Uso: `/editar_conta [id] [empresa|valor|vencimento|categoria] [novo valor]`\n"
            "Ex: `/editar_conta 42 vencimento 15/08/2025`"
        )
        return

    account_id, field_name = context.args[0], context.args[1].lower()
    raw_value = " ".join(context.args[2:]).strip()
    column = EDITABLE_FIELDS.get(field_name)
    if not column:
        await update.message.reply_text(f"Campo inválido. Use um destes: {', '.join(EDITABLE_FIELDS)}.")
        return

    if column == "installment_value":
        value = parse_amount(raw_value)
        if value is None or value < 0:
            await update.message.reply_text("Valor inválido. Ex: `250` ou `1.250,00`.")
            return
    elif column == "due_date":
        due_date = parse_user_date(raw_value)
        if not due_date:
            await update.message.reply_text("Data inválida. Use o formato dd/mm/aaaa.")
            return
        value = due_date.strftime("%Y-%m-%d")
    else:
        value = raw_value

    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    account = book.find_account(account_id)
    if not account:
        await update.message.reply_text(f"Conta `{account_id}` não encontrada.")
        return

    result = book.edit_account(account.id, {column: value})
    if result.ok:
        await update.message.reply_text(
            f"✏️ Parcela atualizada:\n{format_account_line(book.find_account(account.id))}",
            parse_mode="Markdown",
        )
    else:
        await reply_db_error(update, result)
