import datetime

from telegram import Update
from telegram.helpers import escape_markdown
from telegram.ext import ContextTypes

from gestor_financeiro.bot.commands.utils import format_account_line, load_book, reply_db_error
from gestor_financeiro.core import reports
from gestor_financeiro.utils.text_utils import format_currency, format_date, month_label, parse_year_month


async def summary_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Totais do painel: em aberto, vencendo na semana, em atraso e entradas."""
    today = datetime.date.today()
    book, result = load_book(context, today)
    if not result.ok:
        await reply_db_error(update, result)
        return

    stats = reports.dashboard_stats(book.accounts, book.incomes, today)
    by_status = reports.status_totals(book.accounts)
    message = (
        "**Resumo financeiro:**\n\n"
        f"💰 Total entradas: *{format_currency(stats['total_income'])}*\n"
        f"📋 Total em aberto: *{format_currency(stats['total_open'])}*\n"
        f"📅 Vencendo na semana: *{format_currency(stats['due_this_week'])}*\n"
        f"🔴 Total em atraso: *{format_currency(stats['total_overdue'])}*\n\n"
        "**Por status:**\n"
    )
    columns = reports.group_by_status(book.accounts)
    for status, accounts in columns.items():
        message += f"- {status}: {len(accounts)} parcela(s), {format_currency(by_status[status])}\n"
    await update.message.reply_text(message, parse_mode="Markdown")


async def monthly_report_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Relatório de um mês: /relatorio [AAAA-MM] (padrão: mês atual)."""
    today = datetime.date.today()
    year, month = parse_year_month(context.args[0] if context.args else None, today)
    book, result = load_book(context, today)
    if not result.ok:
        await reply_db_error(update, result)
        return

    report = reports.monthly_report(book.accounts, book.incomes, year, month)
    message = f"**Relatório de {month_label(year, month)}:**\n\n"
    message += f"💰 Entradas: *{format_currency(report['total_income'])}*\n"
    message += f"💸 Saídas: *{format_currency(report['total_expense'])}*\n"
    message += f"   ✅ Pago: {format_currency(report['total_paid'])}\n"
    message += f"   ⏳ Pendente: {format_currency(report['total_pending'])}\n"
    message += f"📊 Saldo líquido: *{format_currency(report['net_profit'])}*\n\n"

    if report["accounts"]:
        message += "**Contas do mês:**\n"
        message += "\n".join(format_account_line(acc) for acc in report["accounts"]) + "\n\n"
    else:
        message += "Nenhuma conta neste período.\n\n"

    if report["incomes"]:
        message += "**Entradas do mês:**\n"
        for income in report["incomes"]:
            message += f"- {escape_markdown(income.description, version=1)}: {format_currency(income.value)} em {format_date(income.date)}\n"
    else:
        message += "Nenhuma entrada neste período."

    await update.message.reply_text(message, parse_mode="Markdown")
