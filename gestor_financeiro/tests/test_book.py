import unittest
import datetime
from unittest.mock import MagicMock, patch
from supabase import Client

from gestor_financeiro.core.book import FinanceBook
from gestor_financeiro.core.models import Account, DbResult, Income, PurchaseVoucher


def make_account(id, due_date="2024-06-20", status="Pendente", company="Acme Corp"):
    return Account(id, company, 1000, "1 / 2", 500, due_date, status=status, category="Serviços")


@patch("gestor_financeiro.core.book.db")
class TestFinanceBook(unittest.TestCase):
    def setUp(self):
        self.today = datetime.date(2024, 6, 10)
        self.book = FinanceBook(MagicMock(spec=Client), "user-1", self.today)
        self.book.accounts = [make_account("a1"), make_account("a2", "2024-07-20")]
        self.book.incomes = [Income("i1", "Salário", 3000, "2024-06-05", "Salário", received=False)]
        self.book.vouchers = [PurchaseVoucher("v1", "purchase", "Mercado", 80, "2024-06-02")]

    # --- Carga inicial ---
    def test_load_applies_effective_status(self, mock_db):
        mock_db.list_accounts.return_value = DbResult.success([make_account("x", "2024-06-01")])
        mock_db.list_incomes.return_value = DbResult.success([])
        mock_db.list_vouchers.return_value = DbResult.success([])

        result = self.book.load(self.today)

        self.assertTrue(result.ok)
        self.assertEqual(len(self.book.accounts), 1)
        self.assertEqual(self.book.accounts[0].status, "Atrasado")
        self.assertEqual(self.book.incomes, [])
        mock_db.list_accounts.assert_called_once_with(self.book.supabase_client, "user-1")

    def test_load_failure_keeps_previous_state(self, mock_db):
        mock_db.list_accounts.return_value = DbResult.failure("offline")
        previous = list(self.book.accounts)

        result = self.book.load(self.today)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, "offline")
        self.assertEqual(self.book.accounts, previous)
        mock_db.list_incomes.assert_not_called()

    # --- Parcelamentos ---
    def test_add_plan_prepends_created_rows(self, mock_db):
        mock_db.create_accounts.side_effect = lambda client, user_id, rows: DbResult.success(
            [row.copy(id=f"new-{i}") for i, row in enumerate(rows)]
        )

        result = self.book.add_plan(
            "Tech Solutions", 1200, "2024-06-30", installment_count=4, down_payment=200, today=self.today
        )

        self.assertTrue(result.ok)
        mock_db.create_accounts.assert_called_once()
        sent_rows = mock_db.create_accounts.call_args[0][2]
        self.assertEqual([r.installments for r in sent_rows], ["Entrada", "1 / 4", "2 / 4", "3 / 4", "4 / 4"])
        self.assertEqual(len(self.book.accounts), 7)
        self.assertEqual(self.book.accounts[0].id, "new-0")
        self.assertEqual(self.book.accounts[-1].id, "a2")

    def test_add_plan_failure_leaves_accounts_untouched(self, mock_db):
        mock_db.create_accounts.return_value = DbResult.failure("insert failed")
        previous = list(self.book.accounts)

        result = self.book.add_plan("Tech Solutions", 300, "2024-06-30", installment_count=3, today=self.today)

        self.assertFalse(result.ok)
        self.assertEqual(self.book.accounts, previous)

    # --- Edição, status e exclusão ---
    def test_edit_account_updates_only_that_row(self, mock_db):
        mock_db.update_account.side_effect = lambda client, account_id, fields: DbResult.success(fields)

        result = self.book.edit_account("a1", {"company_name": "Office Supplies", "installment_value": 450})

        self.assertTrue(result.ok)
        sent_fields = mock_db.update_account.call_args[0][2]
        self.assertEqual(sent_fields["company_initials"], "OF")
        edited = self.book.find_account("a1")
        self.assertEqual(edited.company_name, "Office Supplies")
        self.assertEqual(edited.company_initials, "OF")
        self.assertEqual(edited.installment_value, 450)
        self.assertEqual(self.book.find_account("a2").company_name, "Acme Corp")

    def test_edit_account_failure(self, mock_db):
        mock_db.update_account.return_value = DbResult.failure("denied")
        result = self.book.edit_account("a1", {"company_name": "Office Supplies"})
        self.assertFalse(result.ok)
        self.assertEqual(self.book.find_account("a1").company_name, "Acme Corp")

    def test_edit_due_date_to_future_clears_overdue(self, mock_db):
        self.book.accounts = [make_account("late", "2024-06-01")]
        self.assertEqual(self.book.find_account("late").status, "Atrasado")
        mock_db.update_account.side_effect = lambda client, account_id, fields: DbResult.success(fields)

        self.assertTrue(self.book.edit_account("late", {"due_date": "2099-01-01"}).ok)

        self.assertEqual(self.book.find_account("late").status, "Pendente")
        self.assertEqual(self.book.stored_accounts[0].status, "Pendente")

    def test_edit_due_date_to_past_becomes_overdue(self, mock_db):
        mock_db.update_account.side_effect = lambda client, account_id, fields: DbResult.success(fields)

        self.assertTrue(self.book.edit_account("a1", {"due_date": "2024-05-01"}).ok)

        self.assertEqual(self.book.find_account("a1").status, "Atrasado")
        self.assertEqual(self.book.find_account("a2").status, "Pendente")

    def test_paid_then_reopened_is_overdue_again(self, mock_db):
        self.book.accounts = [make_account("late", "2024-06-01", status="Pago")]
        mock_db.update_account_status.return_value = DbResult.success({"status": "Pendente"})

        self.book.change_status("late", "Pendente")

        self.assertEqual(self.book.find_account("late").status, "Atrasado")
        self.assertEqual(self.book.stored_accounts[0].status, "Pendente")

    def test_change_status(self, mock_db):
        mock_db.update_account_status.return_value = DbResult.success({"status": "Pago"})
        result = self.book.change_status("a2", "Pago")
        self.assertTrue(result.ok)
        self.assertEqual(self.book.find_account("a2").status, "Pago")
        self.assertEqual(self.book.find_account("a1").status, "Pendente")

    def test_change_status_failure(self, mock_db):
        mock_db.update_account_status.return_value = DbResult.failure("denied")
        self.book.change_status("a2", "Pago")
        self.assertEqual(self.book.find_account("a2").status, "Pendente")

    def test_delete_account(self, mock_db):
        mock_db.delete_account.return_value = DbResult.success("a1")
        self.assertTrue(self.book.delete_account("a1").ok)
        self.assertIsNone(self.book.find_account("a1"))
        self.assertEqual(len(self.book.accounts), 1)

    def test_delete_account_failure(self, mock_db):
        mock_db.delete_account.return_value = DbResult.failure("denied")
        self.assertFalse(self.book.delete_account("a1").ok)
        self.assertEqual(len(self.book.accounts), 2)

    def test_notifications_use_loaded_accounts(self, mock_db):
        self.book.accounts = [make_account("x", "2024-06-10"), make_account("y", "2024-06-01", status="Atrasado")]
        notifications = self.book.notifications(self.today)
        self.assertEqual([n.type for n in notifications], ["danger", "warning"])

    # --- Entradas ---
    def test_add_income(self, mock_db):
        created = Income("i2", "Freelance", 800, "2024-06-08", "Freelance")
        mock_db.create_income.return_value = DbResult.success(created)

        result = self.book.add_income("Freelance", 800, "2024-06-08", "Freelance")

        self.assertTrue(result.ok)
        self.assertIs(self.book.incomes[0], created)
        sent = mock_db.create_income.call_args[0][2]
        self.assertFalse(sent.received)

    def test_toggle_income_received(self, mock_db):
        mock_db.set_income_received.return_value = DbResult.success(True)
        result = self.book.toggle_income_received("i1")
        self.assertTrue(result.ok)
        mock_db.set_income_received.assert_called_once_with(self.book.supabase_client, "i1", True)
        self.assertTrue(self.book.find_income("i1").received)

    def test_toggle_unknown_income(self, mock_db):
        result = self.book.toggle_income_received("missing")
        self.assertFalse(result.ok)
        mock_db.set_income_received.assert_not_called()

    def test_edit_income(self, mock_db):
        mock_db.update_income.return_value = DbResult.success({"value": 3500})
        self.assertTrue(self.book.edit_income("i1", {"value": 3500}).ok)
        self.assertEqual(self.book.find_income("i1").value, 3500)

    def test_delete_income_failure(self, mock_db):
        mock_db.delete_income.return_value = DbResult.failure("denied")
        self.assertFalse(self.book.delete_income("i1").ok)
        self.assertEqual(len(self.book.incomes), 1)

    # --- Compras e vales ---
    def test_find_voucher(self, mock_db):
        self.assertEqual(self.book.find_voucher("v1").description, "Mercado")
        self.assertIsNone(self.book.find_voucher("missing"))

    def test_add_and_delete_voucher(self, mock_db):
        created = PurchaseVoucher("v2", "voucher", "Vale transporte", 40, "2024-06-09")
        mock_db.create_voucher.return_value = DbResult.success(created)
        mock_db.delete_voucher.return_value = DbResult.success("v1")

        self.assertTrue(self.book.add_voucher("voucher", "Vale transporte", 40, "2024-06-09").ok)
        self.assertTrue(self.book.delete_voucher("v1").ok)

        self.assertEqual([v.id for v in self.book.vouchers], ["v2"])


if __name__ == "__main__":
    unittest.main()
