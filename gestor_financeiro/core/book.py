import datetime
from typing import Any, Dict, List, Union

from supabase import Client

from gestor_financeiro.core import db
from gestor_financeiro.core.installments import generate_plan
from gestor_financeiro.core.models import (
    Account,
    DbResult,
    Income,
    PurchaseVoucher,
)
from gestor_financeiro.core.status import apply_effective_status, build_notifications
from gestor_financeiro.utils.text_utils import company_initials


class FinanceBook:
    """
    Visão em memória das contas, entradas e compras/vales de um usuário.

    Toda alteração vai primeiro ao Supabase; a lista local só muda quando o
    banco confirma. Em caso de falha o `DbResult` volta para quem chamou e o
    estado local fica exatamente como estava.
    """

    def __init__(self, supabase_client: Client, user_id: str, today: Union[datetime.date, None] = None):
        self.supabase_client = supabase_client
        self.user_id = user_id
        self.today = today or datetime.date.today()
        # linhas como gravadas no banco; o status efetivo é calculado na leitura
        self.stored_accounts: List[Account] = []
        self.incomes: List[Income] = []
        self.vouchers: List[PurchaseVoucher] = []

    @property
    def accounts(self) -> List[Account]:
        """Contas com o status efetivo de `self.today`."""
        return apply_effective_status(self.stored_accounts, self.today)

    @accounts.setter
    def accounts(self, accounts: List[Account]) -> None:
        self.stored_accounts = list(accounts)

    # --- Leitura ---
    def load(self, today: Union[datetime.date, None] = None) -> DbResult:
        """Recarrega tudo do banco; `today` passa a ser a data do status efetivo."""
        today = today or self.today
        accounts = db.list_accounts(self.supabase_client, self.user_id)
        if not accounts.ok:
            return accounts
        incomes = db.list_incomes(self.supabase_client, self.user_id)
        if not incomes.ok:
            return incomes
        vouchers = db.list_vouchers(self.supabase_client, self.user_id)
        if not vouchers.ok:
            return vouchers

        self.today = today
        self.stored_accounts = accounts.data
        self.incomes = incomes.data
        self.vouchers = vouchers.data
        return DbResult.success()

    def find_account(self, account_id: str) -> Union[Account, None]:
        return next((acc for acc in self.accounts if str(acc.id) == str(account_id)), None)

    def find_income(self, income_id: str) -> Union[Income, None]:
        return next((inc for inc in self.incomes if str(inc.id) == str(income_id)), None)

    def find_voucher(self, voucher_id: str) -> Union[PurchaseVoucher, None]:
        return next((v for v in self.vouchers if str(v.id) == str(voucher_id)), None)

    def notifications(self, today: Union[datetime.date, None] = None, sort_by_due_date: bool = False):
        return build_notifications(self.stored_accounts, today or self.today, sort_by_due_date)

    # --- Contas a pagar ---
    def add_plan(
        self,
        company_name: str,
        total_value: float,
        first_due_date: str,
        installment_count: Any = 1,
        down_payment: float = 0.0,
        category: Union[str, None] = None,
        installment_value: Union[float, None] = None,
        today: Union[datetime.date, None] = None,
    ) -> DbResult:
        """Gera o parcelamento e grava todas as linhas em um único lote."""
        rows = generate_plan(
            total_value=total_value,
            first_due_date=first_due_date,
            installment_count=installment_count,
            down_payment=down_payment,
            company_name=company_name,
            category=category,
            installment_value=installment_value,
            today=today or self.today,
        )
        result = db.create_accounts(self.supabase_client, self.user_id, rows)
        if result.ok:
            self.stored_accounts = list(result.data) + self.stored_accounts
        return result

    def edit_account(self, account_id: str, fields: Dict[str, Any]) -> DbResult:
        """Edita exatamente uma parcela; as iniciais acompanham o nome da empresa."""
        fields = dict(fields)
        if fields.get("company_name"):
            fields["company_initials"] = company_initials(fields["company_name"])
        result = db.update_account(self.supabase_client, account_id, fields)
        if result.ok:
            self.stored_accounts = [
                acc.copy(**result.data) if str(acc.id) == str(account_id) else acc
                for acc in self.stored_accounts
            ]
        return result

    def change_status(self, account_id: str, status: str) -> DbResult:
        result = db.update_account_status(self.supabase_client, account_id, status)
        if result.ok:
            self.stored_accounts = [
                acc.copy(status=status) if str(acc.id) == str(account_id) else acc
                for acc in self.stored_accounts
            ]
        return result

    def delete_account(self, account_id: str) -> DbResult:
        result = db.delete_account(self.supabase_client, account_id)
        if result.ok:
            self.stored_accounts = [acc for acc in self.stored_accounts if str(acc.id) != str(account_id)]
        return result

    # --- Entradas ---
    def add_income(
        self,
        description: str,
        value: float,
        date: str,
        category: Union[str, None] = None,
    ) -> DbResult:
        income = Income(id=None, description=description, value=value, date=date, category=category, received=False)
        result = db.create_income(self.supabase_client, self.user_id, income)
        if result.ok:
            self.incomes = [result.data] + self.incomes
        return result

    def edit_income(self, income_id: str, fields: Dict[str, Any]) -> DbResult:
        result = db.update_income(self.supabase_client, income_id, fields)
        if result.ok:
            for income in self.incomes:
                if str(income.id) == str(income_id):
                    for key, value in result.data.items():
                        setattr(income, key, value)
        return result

    def toggle_income_received(self, income_id: str) -> DbResult:
        income = self.find_income(income_id)
        if not income:
            return DbResult.failure(f"Entrada {income_id} não encontrada.")
        result = db.set_income_received(self.supabase_client, income.id, not income.received)
        if result.ok:
            income.received = result.data
        return result

    def delete_income(self, income_id: str) -> DbResult:
        result = db.delete_income(self.supabase_client, income_id)
        if result.ok:
            self.incomes = [inc for inc in self.incomes if str(inc.id) != str(income_id)]
        return result

    # --- Compras e vales ---
    def add_voucher(self, type: str, description: str, amount: float, date: str) -> DbResult:
        voucher = PurchaseVoucher(id=None, type=type, description=description, amount=amount, date=date)
        result = db.create_voucher(self.supabase_client, self.user_id, voucher)
        if result.ok:
            self.vouchers = [result.data] + self.vouchers
        return result

    def delete_voucher(self, voucher_id: str) -> DbResult:
        result = db.delete_voucher(self.supabase_client, voucher_id)
        if result.ok:
            self.vouchers = [v for v in self.vouchers if str(v.id) != str(voucher_id)]
        return result
