from dotenv import load_dotenv
import os
import sys
import traceback

from gestor_financeiro.bot.bot_setup import setup_and_run_bot
from gestor_financeiro.core.db import get_supabase_client

from flask import Flask, request, jsonify
from telegram import Update
import asyncio

WEBHOOK_PATH_SUFFIX = "/webhook"


def build_config() -> dict:
    load_dotenv()
    return {
        "TELEGRAM_BOT_TOKEN": os.getenv("TELEGRAM_BOT_TOKEN"),
        "SUPABASE_CLIENT": get_supabase_client(),
        "SUPABASE_USER_ID": os.getenv("SUPABASE_USER_ID"),
    }


def create_app(ptb_application) -> Flask:
    """Aplicação Flask que repassa os updates do webhook do Telegram para o bot."""
    flask_app = Flask(__name__)

    @flask_app.route(WEBHOOK_PATH_SUFFIX, methods=["POST"])
    async def telegram_webhook():
        if not request.is_json:
            print("ERROR: Webhook received non-JSON request.")
            return jsonify({"status": "error", "message": "Request must be JSON"}), 400

        update_json = request.get_json()
        try:
            update = Update.de_json(update_json, ptb_application.bot)
            await ptb_application.process_update(update)
            return jsonify({"status": "ok"}), 200
        except Exception as e:
            print(f"ERROR: Failed to process Telegram update: {e}", file=sys.stderr)
            traceback.print_exc(file=sys.stderr)
            return jsonify({"status": "error", "message": "Failed to process update"}), 500

    return flask_app


def create_wsgi_app() -> Flask:
    """Ponto de entrada do Gunicorn: `gunicorn 'gestor_financeiro.main:create_wsgi_app()'`."""
    try:
        config = build_config()
        print("DEBUG: Configurações do bot criadas.")
        ptb_application = setup_and_run_bot(config)
        asyncio.run(ptb_application.initialize())
        print("DEBUG: python-telegram-bot Application inicializada com sucesso!")
        return create_app(ptb_application)
    except Exception as e:
        print(f"ERROR: Erro crítico durante a inicialização: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        raise


def main() -> None:
    """Roda o bot em modo polling (desenvolvimento local)."""
    ptb_application = setup_and_run_bot(build_config())
    ptb_application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
