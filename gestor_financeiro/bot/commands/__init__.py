# gestor_financeiro/bot/commands/__init__.py

from .utils import start_command, help_command
from .accounts import (
    delete_account_command,
    edit_account_command,
    list_accounts_command,
    notifications_command,
    pay_account_command,
    set_status_command,
)
from .incomes import (
    add_income_command,
    delete_income_command,
    edit_income_command,
    list_incomes_command,
    toggle_received_command,
)
from .reports import monthly_report_command, summary_command
from .vouchers import add_voucher_command, delete_voucher_command, vouchers_command
from .assistant import assistant_command

# Nome do comando no Telegram -> função
ALL_COMMANDS = {
    "start": start_command,
    "help": help_command,
    "contas": list_accounts_command,
    "avisos": notifications_command,
    "pagar": pay_account_command,
    "status": set_status_command,
    "excluir_conta": delete_account_command,
    "editar_conta": edit_account_command,
    "entradas": list_incomes_command,
    "nova_entrada": add_income_command,
    "recebido": toggle_received_command,
        "editar_entrada": edit_income_command,
"excluir_entrada": delete_income_command,
    "resumo": summary_command,
    "relatorio": monthly_report_command,
    "compras": vouchers_command,
    "nova_compra": add_voucher_command,
    "excluir_compra": delete_voucher_command,
    "assistente": assistant_command,
}
