import datetime

from telegram import ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.ext import ContextTypes, ConversationHandler

from gestor_financeiro.bot.handlers import ASKING_CONFIRMATION
from gestor_financeiro.core.book import FinanceBook
from gestor_financeiro.utils.text_utils import format_currency


async def handle_confirmation(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Lida com a confirmação (Sim/Não) do parcelamento e grava todas as parcelas de uma vez."""
    user_response = update.message.text.lower()
    pending_account = context.user_data.get("pending_account")

    if not pending_account:
        await update.message.reply_text(
            "Ops! 😬 Não encontrei uma conta pendente para confirmar. Use /nova_conta. 🔄",
            reply_markup=ReplyKeyboardRemove(),
        )
        return ConversationHandler.END

    if user_response in ("sim ✅", "sim", "s"):
        book = FinanceBook(context.bot_data["supabase_client"], context.bot_data["user_id"])
        result = book.add_plan(
            company_name=pending_account["company_name"],
            total_value=pending_account["total_value"],
            first_due_date=pending_account["first_due_date"],
            installment_count=pending_account["installment_count"],
            down_payment=pending_account.get("down_payment", 0.0),
            category=pending_account.get("category"),
            today=datetime.date.today(),
        )
        if result.ok:
            await update.message.reply_text(
                f"✅ Conta de {format_currency(pending_account['total_value'])} para "
                f"'{pending_account['company_name']}' cadastrada com {len(result.data)} lançamento(s)! 🥳",
                reply_markup=ReplyKeyboardRemove(),
            )
        else:
            await update.message.reply_text(
                "❌ Ocorreu um erro ao cadastrar a conta. Nenhuma parcela foi criada. Tente novamente mais tarde. 😟",
                reply_markup=ReplyKeyboardRemove(),
            )

        context.user_data.pop("pending_account", None)
        return ConversationHandler.END

    elif user_response in ("não ❌", "não", "nao", "n"):
        context.user_data.pop("pending_account", None)
        await update.message.reply_text(
            "Entendido! Nada foi gravado. Use /nova_conta para começar de novo. 👍",
            reply_markup=ReplyKeyboardRemove(),
        )
        return ConversationHandler.END

    else:
        keyboard = [["Sim ✅", "Não ❌"]]
        reply_markup = ReplyKeyboardMarkup(keyboard, one_time_keyboard=True, resize_keyboard=True)
        await update.message.reply_text(
            "Por favor, responda apenas 'Sim ✅' ou 'Não ❌'.",
            reply_markup=reply_markup,
        )
        return ASKING_CONFIRMATION
