# gestor_financeiro/bot/bot_setup.py
from telegram.ext import Application, MessageHandler, filters, CommandHandler, ConversationHandler
from gestor_financeiro.bot.commands import ALL_COMMANDS
from gestor_financeiro.bot.handlers import (
    start_new_account, handle_company, handle_total, handle_down_payment,
    handle_installments, handle_due_date, handle_category, handle_confirmation,
    cancel_new_account,
    ASKING_COMPANY, ASKING_TOTAL, ASKING_DOWN_PAYMENT, ASKING_INSTALLMENTS,
    ASKING_DUE_DATE, ASKING_CATEGORY, ASKING_CONFIRMATION,
)


def _text(callback) -> list:
    return [MessageHandler(filters.TEXT & ~filters.COMMAND, callback)]


def setup_and_run_bot(config: dict) -> Application:
    """
    Configura a aplicação do bot do Telegram (Comandos e a conversa de /nova_conta).
    Retorna o objeto Application configurado, pronto para ser usado pelo servidor WSGI
    ou por `run_polling()`.
    """
    application = Application.builder().token(config["TELEGRAM_BOT_TOKEN"]).build()

    # Cliente Supabase e usuário ficam no bot_data para handlers e comandos
    application.bot_data["supabase_client"] = config["SUPABASE_CLIENT"]
    application.bot_data["user_id"] = config["SUPABASE_USER_ID"]

    # --- Conversa de cadastro de conta parcelada ---
    # Registrada antes dos comandos para que /cancel chegue ao fallback durante a conversa.
    conv_handler = ConversationHandler(
        entry_points=[CommandHandler("nova_conta", start_new_account)],
        states={
            ASKING_COMPANY: _text(handle_company),
            ASKING_TOTAL: _text(handle_total),
            ASKING_DOWN_PAYMENT: _text(handle_down_payment),
            ASKING_INSTALLMENTS: _text(handle_installments),
            ASKING_DUE_DATE: _text(handle_due_date),
            ASKING_CATEGORY: _text(handle_category),
            ASKING_CONFIRMATION: _text(handle_confirmation),
        },
        fallbacks=[CommandHandler("cancel", cancel_new_account)],
    )
    application.add_handler(conv_handler)

    # --- Comandos acionados com '/' ---
    for name, callback in ALL_COMMANDS.items():
        application.add_handler(CommandHandler(name, callback))

    print(f"Bot Telegram configurado com {len(ALL_COMMANDS)} comandos.")
    return application
