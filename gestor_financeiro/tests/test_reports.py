import unittest
import datetime

from gestor_financeiro.core import reports
from gestor_financeiro.core.models import Account, Income, PurchaseVoucher


def make_account(id, value, due_date, status, category="Outros", company=None):
    return Account(id, company or f"Empresa {id}", value, "1 / 1", value, due_date, status=status, category=category)


class TestReports(unittest.TestCase):
    def setUp(self):
        self.today = datetime.date(2024, 6, 10)
        self.accounts = [
            make_account("A", 100, "2024-06-12", "Pendente", "Serviços", "Tech Solutions"),
            make_account("B", 50, "2024-06-01", "Atrasado", "Fornecedores", "Office Supplies"),
            make_account("C", 70, "2024-06-11", "Pago", "Serviços", "Global Logistics"),
            make_account("D", 30, "2024-06-30", "Pendente", "Impostos", "Receita"),
            make_account("E", 10, "2024-06-17", "Pendente", "Marketing", "Marketing Pros"),
        ]
        self.incomes = [
            Income("i1", "Salário", 1000, "2024-06-05", "Salário"),
            Income("i2", "Freelance", 500, "2024-05-30", "Freelance"),
        ]

    def test_dashboard_stats(self):
        stats = reports.dashboard_stats(self.accounts, self.incomes, self.today)
        self.assertEqual(stats["total_open"], 190)
        # A (06-12) e E (06-17, limite inclusivo); B já venceu e D passa de 7 dias
        self.assertEqual(stats["due_this_week"], 110)
        self.assertEqual(stats["total_overdue"], 50)
        self.assertEqual(stats["total_income"], 1500)

    def test_dashboard_stats_empty(self):
        stats = reports.dashboard_stats([], [], self.today)
        self.assertEqual(stats, {"total_open": 0, "due_this_week": 0, "total_overdue": 0, "total_income": 0})

    def test_status_totals(self):
        self.assertEqual(
            reports.status_totals(self.accounts),
            {"Pendente": 140, "Pago": 70, "Atrasado": 50},
        )

    def test_monthly_report(self):
        report = reports.monthly_report(self.accounts, self.incomes, 2024, 6)
        self.assertEqual([a.id for a in report["accounts"]], ["A", "B", "C", "D", "E"])
        self.assertEqual([i.id for i in report["incomes"]], ["i1"])
        self.assertEqual(report["total_expense"], 260)
        self.assertEqual(report["total_paid"], 70)
        self.assertEqual(report["total_pending"], 190)
        self.assertEqual(report["total_income"], 1000)
        self.assertEqual(report["net_profit"], 740)

    def test_monthly_report_other_month(self):
        report = reports.monthly_report(self.accounts, self.incomes, 2024, 5)
        self.assertEqual(report["accounts"], [])
        self.assertEqual(report["total_income"], 500)
        self.assertEqual(report["net_profit"], 500)

    def test_filter_accounts(self):
        by_term = reports.filter_accounts(self.accounts, search_term="serv")
        self.assertEqual([a.id for a in by_term], ["A", "C"])
        by_company = reports.filter_accounts(self.accounts, search_term="OFFICE")
        self.assertEqual([a.id for a in by_company], ["B"])
        by_status = reports.filter_accounts(self.accounts, status="Pendente", category="Impostos")
        self.assertEqual([a.id for a in by_status], ["D"])
        self.assertEqual(reports.filter_accounts(self.accounts), self.accounts)

    def test_paginate(self):
        items = list(range(25))
        page, total_pages, current = reports.paginate(items, page=3, per_page=10)
        self.assertEqual(page, [20, 21, 22, 23, 24])
        self.assertEqual(total_pages, 3)
        self.assertEqual(current, 3)

        _, _, clamped = reports.paginate(items, page=9, per_page=10)
        self.assertEqual(clamped, 3)
        self.assertEqual(reports.paginate([], page=2), ([], 0, 1))

    def test_group_by_status(self):
        columns = reports.group_by_status(self.accounts)
        self.assertEqual(list(columns), ["Pendente", "Atrasado", "Pago"])
        self.assertEqual([a.id for a in columns["Pendente"]], ["A", "D", "E"])
        self.assertEqual([a.id for a in columns["Atrasado"]], ["B"])
        self.assertEqual([a.id for a in columns["Pago"]], ["C"])

    def test_voucher_summary(self):
        vouchers = [
            PurchaseVoucher("v1", "purchase", "Mercado", 100, "2024-06-05"),
            PurchaseVoucher("v2", "voucher", "Vale", 40, "2024-06-20"),
            PurchaseVoucher("v3", "purchase", "Farmácia", 10, "2024-05-01"),
        ]
        summary = reports.voucher_summary(vouchers, 2024, 6)
        self.assertEqual([v.id for v in summary["vouchers"]], ["v2", "v1"])
        self.assertEqual(summary["purchases"], 100)
        self.assertEqual(summary["vouchers_total"], 40)
        self.assertEqual(summary["total"], 140)

    def test_voucher_summary_empty(self):
        summary = reports.voucher_summary([], 2024, 6)
        self.assertEqual(summary["vouchers"], [])
        self.assertEqual(summary["total"], 0)


if __name__ == "__main__":
    unittest.main()
