import asyncio
import datetime

from telegram import Update
from telegram.ext import ContextTypes

from gestor_financeiro.bot.commands.utils import load_book, reply_db_error
from gestor_financeiro.core import assistant


async def assistant_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia a pergunta ao assistente financeiro junto com o resumo das finanças."""
    if not context.args:
        await update.message.reply_text(
            "Uso: `/assistente [pergunta]`\n"
            "Ex: `/assistente Quais contas tenho para pagar nos próximos dias?`"
        )
        return

    question = " ".join(context.args).strip()
    book, result = load_book(context, datetime.date.today())
    if not result.ok:
        await reply_db_error(update, result)
        return

    history = context.user_data.setdefault("assistant_history", [])
    user_name = update.effective_user.first_name if update.effective_user else None
    # a chamada ao webhook bloqueia por até ASSISTANT_TIMEOUT segundos
    reply = await asyncio.to_thread(
        assistant.ask_assistant,
        question,
        assistant.build_financial_context(book.accounts, book.incomes),
        history=history,
        user_name=user_name,
    )

    history.append({"role": "user", "content": question})
    history.append({"role": "assistant", "content": reply})
    del history[:-assistant.HISTORY_SIZE]

    await update.message.reply_text(reply)
