import datetime
from typing import Tuple

from telegram import Update
from telegram.helpers import escape_markdown
from telegram.ext import ContextTypes

from gestor_financeiro.core.book import FinanceBook
from gestor_financeiro.core.models import Account, DbResult, STATUS_OVERDUE, STATUS_PAID, STATUS_PENDING
from gestor_financeiro.utils.text_utils import format_currency, format_date

STATUS_EMOJI = {
    STATUS_PENDING: "⏳",
    STATUS_PAID: "✅",
    STATUS_OVERDUE: "🔴",
}

SEVERITY_EMOJI = {
    "danger": "🚨",
    "warning": "⚠️",
    "info": "📅",
}


def load_book(context: ContextTypes.DEFAULT_TYPE, today: datetime.date) -> Tuple[FinanceBook, DbResult]:
    """Carrega do Supabase as contas, entradas e compras do usuário configurado."""
    book = FinanceBook(context.bot_data["supabase_client"], context.bot_data["user_id"], today)
    return book, book.load(today)


def format_account_line(account: Account) -> str:
    emoji = STATUS_EMOJI.get(account.status, "💸")
    return (
        f"{emoji} `{account.id}` {escape_markdown(account.company_name, version=1)} ({account.installments}) - "
        f"{format_currency(account.installment_value)} vence {format_date(account.due_date)} "
        f"[{escape_markdown(account.category or '', version=1)}]"
    )


async def reply_db_error(update: Update, result: DbResult) -> None:
    await update.message.reply_text(
        f"❌ Não consegui falar com o banco de dados agora. 😟\nDetalhes: {result.error}"
    )


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia uma mensagem quando o comando /start é emitido."""
    await update.message.reply_text(
        "Olá! Sou seu gestor financeiro. Cadastro suas **contas a pagar** (com entrada e parcelas), "
        "suas **entradas** e aviso quando algo estiver para vencer.\n\n"
        "Comandos úteis:\n"
        "- `/nova_conta` para cadastrar uma conta parcelada.\n"
        "- `/contas [página]` para listar suas contas.\n"
        "- `/avisos` para ver contas atrasadas e vencendo.\n"
        "- `/resumo` para ver os totais do painel.\n"
        "- `/help` para mais informações."
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia uma mensagem quando o comando /help é emitido."""
    await update.message.reply_text(
        "**Contas a pagar:**\n"
        "- `/nova_conta`: Cadastra uma conta, pedindo empresa, valor total, entrada, parcelas, 1º vencimento e categoria.\n"
        "- `/contas [página] [status] [busca]`: Lista as parcelas, com o status do dia (pendentes vencidas aparecem como Atrasado).\n"
        "- `/avisos`: Contas atrasadas, vencendo hoje e nos próximos dias.\n"
        "- `/pagar [id]`: Marca a parcela como paga.\n"
        "- `/status [id] [Pendente|Pago|Atrasado]`: Altera o status de uma parcela.\n"
        "- `/editar_conta [id] [empresa|valor|vencimento|categoria] [novo valor]`: Edita uma única parcela.\n"
        "- `/excluir_conta [id]`: Exclui uma parcela.\n\n"
        "**Entradas:**\n"
        "- `/entradas`: Lista suas entradas.\n"
        "- `/nova_entrada [valor] [descrição]`: Registra uma entrada com a data de hoje (ex: `/nova_entrada 3000 Salário`).\n"
        "- `/recebido [id]`: Marca/desmarca a entrada como recebida.\n"
        "- `/editar_entrada [id] [descricao|valor|data|categoria] [novo valor]`: Edita uma entrada.\n"
        "- `/excluir_entrada [id]`: Exclui uma entrada.\n\n"
        "**Relatórios:**\n"
        "- `/resumo`: Total em aberto, vencendo na semana, em atraso e total de entradas.\n"
        "- `/relatorio [AAAA-MM]`: Contas e entradas do mês (ex: `/relatorio 2025-07`).\n"
        "- `/compras [AAAA-MM]`: Compras e vales do mês.\n"
        "- `/nova_compra [compra|vale] [valor] [descrição]`: Registra uma compra ou vale com a data de hoje.\n"
        "- `/excluir_compra [id]`: Exclui uma compra ou vale.\n"
        "- `/assistente [pergunta]`: Pergunta ao assistente financeiro."
    )
