import os
from dotenv import load_dotenv

load_dotenv()

# Configurações do Telegram
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")

# Configurações do Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
# Usuário do Supabase Auth em nome de quem o bot lê e grava as linhas
SUPABASE_USER_ID = os.getenv("SUPABASE_USER_ID")

# Webhook do n8n usado pelo assistente financeiro
ASSISTANT_WEBHOOK_URL = os.getenv("ASSISTANT_WEBHOOK_URL", "")
ASSISTANT_TIMEOUT = int(os.getenv("ASSISTANT_TIMEOUT", "30"))

# Avisos de vencimento e listagens
NOTIFICATION_DAYS_AHEAD = int(os.getenv("NOTIFICATION_DAYS_AHEAD", "3"))
ITEMS_PER_PAGE = int(os.getenv("ITEMS_PER_PAGE", "10"))
