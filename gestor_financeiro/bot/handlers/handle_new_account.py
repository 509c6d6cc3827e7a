from telegram import ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.ext import ContextTypes, ConversationHandler

from gestor_financeiro.bot.handlers import (
    ASKING_CATEGORY,
    ASKING_COMPANY,
    ASKING_CONFIRMATION,
    ASKING_DOWN_PAYMENT,
    ASKING_DUE_DATE,
    ASKING_INSTALLMENTS,
    ASKING_TOTAL,
)
from gestor_financeiro.bot.handlers.aux import send_plan_preview
from gestor_financeiro.core.installments import parse_installment_count
from gestor_financeiro.core.models import ACCOUNT_CATEGORIES, DEFAULT_CATEGORY
from gestor_financeiro.utils.text_utils import format_currency, parse_amount, parse_user_date

NO_DOWN_PAYMENT_ANSWERS = ("0", "não", "nao", "sem entrada", "nenhuma")


async def start_new_account(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Início do cadastro de uma conta a pagar (/nova_conta)."""
    context.user_data["pending_account"] = {}
    await update.message.reply_text(
        "Vamos cadastrar uma nova conta! 🧾\nQual é o *nome da empresa* (fornecedor)?\n"
        "Use /cancel para desistir a qualquer momento.",
        parse_mode="Markdown",
        reply_markup=ReplyKeyboardRemove(),
    )
    return ASKING_COMPANY


async def handle_company(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    company_name = update.message.text.strip()
    if not company_name:
        await update.message.reply_text("O nome da empresa é obrigatório. Qual é a empresa?")
        return ASKING_COMPANY

    context.user_data.setdefault("pending_account", {})["company_name"] = company_name
    await update.message.reply_text("💰 Qual é o *valor total* da conta? (ex: `1.200,00`)", parse_mode="Markdown")
    return ASKING_TOTAL


async def handle_total(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    total_value = parse_amount(update.message.text)
    if total_value is None or total_value <= 0:
        await update.message.reply_text("O valor total precisa ser um número maior que zero. Tente de novo. 🔄")
        return ASKING_TOTAL

    context.user_data["pending_account"]["total_value"] = total_value
    reply_markup = ReplyKeyboardMarkup([["Sem entrada"]], one_time_keyboard=True, resize_keyboard=True)
    await update.message.reply_text(
        "💵 Vai dar alguma *entrada*? Digite o valor ou toque em 'Sem entrada'.",
        parse_mode="Markdown",
        reply_markup=reply_markup,
    )
    return ASKING_DOWN_PAYMENT


async def handle_down_payment(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    pending = context.user_data["pending_account"]
    text = update.message.text.strip().lower()
    down_payment = 0.0 if text in NO_DOWN_PAYMENT_ANSWERS else parse_amount(text)

    if down_payment is None or down_payment < 0:
        await update.message.reply_text("Não entendi o valor da entrada. Digite um número ou 'Sem entrada'.")
        return ASKING_DOWN_PAYMENT
    if down_payment > pending["total_value"]:
        await update.message.reply_text(
            f"A entrada não pode ser maior que o valor total ({format_currency(pending['total_value'])}). "
            "Digite outro valor."
        )
        return ASKING_DOWN_PAYMENT

    pending["down_payment"] = down_payment
    reply_markup = ReplyKeyboardMarkup([["1", "2", "3", "4"], ["6", "10", "12"]], one_time_keyboard=True, resize_keyboard=True)
    await update.message.reply_text("🔢 Em quantas *parcelas*?", parse_mode="Markdown", reply_markup=reply_markup)
    return ASKING_INSTALLMENTS


async def handle_installments(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    context.user_data["pending_account"]["installment_count"] = parse_installment_count(update.message.text)
    await update.message.reply_text(
        "📅 Qual é a data do *primeiro vencimento*? (dd/mm/aaaa)",
        parse_mode="Markdown",
        reply_markup=ReplyKeyboardRemove(),
    )
    return ASKING_DUE_DATE


async def handle_due_date(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    due_date = parse_user_date(update.message.text)
    if not due_date:
        await update.message.reply_text("Data inválida. Use o formato dd/mm/aaaa (ex: 31/01/2025).")
        return ASKING_DUE_DATE

    context.user_data["pending_account"]["first_due_date"] = due_date.strftime("%Y-%m-%d")
    keyboard = [ACCOUNT_CATEGORIES[i:i + 3] for i in range(0, len(ACCOUNT_CATEGORIES), 3)]
    reply_markup = ReplyKeyboardMarkup(keyboard, one_time_keyboard=True, resize_keyboard=True)
    await update.message.reply_text("🏷️ Qual é a *categoria*?", parse_mode="Markdown", reply_markup=reply_markup)
    return ASKING_CATEGORY


async def handle_category(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    category = update.message.text.strip() or DEFAULT_CATEGORY
    context.user_data["pending_account"]["category"] = category
    await send_plan_preview(update, context, context.user_data["pending_account"])
    return ASKING_CONFIRMATION


async def cancel_new_account(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    context.user_data.pop("pending_account", None)
    await update.message.reply_text("Cadastro cancelado. 👍", reply_markup=ReplyKeyboardRemove())
    return ConversationHandler.END
