import datetime

from telegram import Update
from telegram.helpers import escape_markdown
from telegram.ext import ContextTypes

from gestor_financeiro.bot.commands.utils import load_book, reply_db_error
from gestor_financeiro.core.models import INCOME_CATEGORIES, DEFAULT_CATEGORY
from gestor_financeiro.utils.text_utils import format_currency, format_date, parse_amount, parse_user_date, today_string


async def list_incomes_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Lista as entradas, da mais recente para a mais antiga."""
    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    if not book.incomes:
        await update.message.reply_text(
            "Nenhuma entrada registrada ainda. Use `/nova_entrada [valor] [descrição]`."
        )
        return

    message = "**Suas entradas:**\n\n"
    total = 0.0
    for income in book.incomes:
        received = "✅" if income.received else "⏳"
        message += (
            f"{received} `{income.id}` {escape_markdown(income.description, version=1)} ({escape_markdown(income.category, version=1)}) - "
            f"{format_currency(income.value)} em {format_date(income.date)}\n"
        )
        total += income.value
    message += f"\n**Total: {format_currency(total)}**"
    await update.message.reply_text(message, parse_mode="Markdown")


async def add_income_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Registra uma entrada: /nova_entrada [valor] [descrição]. A categoria é inferida da descrição."""
    if not context.args or len(context.args) < 2:
        await update.message.reply_text(
            "Uso: `/nova_entrada [valor] [descrição]`\nEx: `/nova_entrada 3000 Salário`"
        )
        return

    value = parse_amount(context.args[0])
    if value is None or value <= 0:
        await update.message.reply_text("O valor precisa ser um número maior que zero. Ex: `1500` ou `1.500,50`.")
        return

    description = " ".join(context.args[1:]).strip()
    category = next(
        (cat for cat in INCOME_CATEGORIES if cat.lower() == description.lower()),
        DEFAULT_CATEGORY,
    )

    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    result = book.add_income(description, value, today_string(), category)
    if result.ok:
        await update.message.reply_text(
            f"✅ Entrada de {format_currency(value)} de '{description}' registrada com sucesso! 🥳"
        )
    else:
        await reply_db_error(update, result)


async def toggle_received_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Marca ou desmarca uma entrada como recebida."""
    if not context.args:
        await update.message.reply_text("Uso: `/recebido [id_da_entrada]`")
        return

    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    income = book.find_income(context.args[0])
    if not income:
        await update.message.reply_text(f"Entrada `{context.args[0]}` não encontrada. Use `/entradas` para ver os ids.")
        return

    result = book.toggle_income_received(income.id)
    if result.ok:
        state = "recebida ✅" if income.received else "não recebida ⏳"
        await update.message.reply_text(f"A entrada '{income.description}' agora está {state}.")
    else:
        await reply_db_error(update, result)


async def delete_income_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Exclui uma entrada."""
    if not context.args:
        await update.message.reply_text("Uso: `/excluir_entrada [id_da_entrada]`")
        return

    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    income = book.find_income(context.args[0])
    if not income:
        await update.message.reply_text(f"Entrada `{context.args[0]}` não encontrada. Use `/entradas` para ver os ids.")
        return

    result = book.delete_income(income.id)
    if result.ok:
        await update.message.reply_text(f"🗑️ Entrada '{income.description}' excluída.")
    else:
        await reply_db_error(update, result)


# Campo digitado no /editar_entrada -> coluna da tabela incomes
EDITABLE_FIELDS = {
    "descricao": "description",
    "descrição": "description",
    "valor": "value",
    "data": "date",
    "categoria": "category",
}


async def edit_income_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Edita uma entrada: /editar_entrada [id] [descricao|valor|data|categoria] [novo valor]."""
    if not context.args or len(context.args) < 3:
        await update.message.reply_text(
            "Uso: `/editar_entrada [id] [descricao|valor|data|categoria] [novo valor]`\n"
            "Ex: `/editar_entrada 7 valor 3.200,00`"
        )
        return

    income_id, field_name = context.args[0], context.args[1].lower()
    raw_value = " ".join(context.args[2:]).strip()
    column = EDITABLE_FIELDS.get(field_name)
    if not column:
        await update.message.reply_text("Campo inválido. Use um destes: descricao, valor, data, categoria.")
        return

    if column == "value":
        value = parse_amount(raw_value)
        if value is None or value <= 0:
            await update.message.reply_text("O valor precisa ser um número maior que zero. Ex: `1500` ou `1.500,50`.")
            return
    elif column == "date":
        date = parse_user_date(raw_value)
        if not date:
            await update.message.reply_text("Data inválida. Use o formato dd/mm/aaaa.")
            return
        value = date.strftime("%Y-%m-%d")
    else:
        value = raw_value

    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    income = book.find_income(income_id)
    if not income:
        await update.message.reply_text(f"Entrada `{income_id}` não encontrada. Use `/entradas` para ver os ids.")
        return

    result = book.edit_income(income.id, {column: value})
    if result.ok:
        await update.message.reply_text(
            f"✏️ Entrada atualizada: {income.description} ({income.category}) - "
            f"{format_currency(income.value)} em {format_date(income.date)}"
        )
    else:
        await reply_db_error(update, result)
