import unittest
import json
from unittest.mock import MagicMock, patch

import requests

from gestor_financeiro.core import assistant
from gestor_financeiro.core.models import Account, Income


class TestFinancialContext(unittest.TestCase):
    def test_build_financial_context(self):
        accounts = [
            Account(str(i), f"Empresa {i}", 100, "1 / 1", 100, f"2024-06-{i + 1:02d}",
                    status=status, category=category)
            for i, (status, category) in enumerate([
                ("Pendente", "Serviços"),
                ("Atrasado", "Impostos"),
                ("Pago", "Serviços"),
                ("Pendente", "Aluguel"),
                ("Pendente", "Outros"),
                ("Pago", "Outros"),
            ])
        ]
        incomes = [Income("i1", "Salário", 1000, "2024-06-05")]

        context = assistant.build_financial_context(accounts, incomes)

        self.assertEqual(context["totalExpenses"], 600)
        self.assertEqual(context["totalIncomes"], 1000)
        self.assertEqual(context["balance"], 400)
        self.assertEqual(context["pendingAccounts"], 3)
        self.assertEqual(context["overdueAccounts"], 1)
        self.assertEqual(context["paidAccounts"], 2)
        self.assertEqual(context["totalAccounts"], 6)
        self.assertEqual(context["categories"], ["Serviços", "Impostos", "Aluguel", "Outros"])
        self.assertEqual(len(context["recentAccounts"]), 5)
        self.assertEqual(
            context["recentAccounts"][0],
            {"company": "Empresa 0", "value": 100, "dueDate": "2024-06-01", "status": "Pendente"},
        )


class TestExtractReply(unittest.TestCase):
    def test_plain_text(self):
        self.assertEqual(assistant.extract_reply("Olá! Como posso ajudar?"), "Olá! Como posso ajudar?")

    def test_json_string(self):
        self.assertEqual(assistant.extract_reply(json.dumps("Tudo certo")), "Tudo certo")

    def test_object_with_known_key(self):
        self.assertEqual(assistant.extract_reply(json.dumps({"output": "Saldo positivo"})), "Saldo positivo")
        self.assertEqual(
            assistant.extract_reply(json.dumps({"message": "segunda", "response": "primeira"})),
            "primeira",
        )

    def test_list_uses_first_item(self):
        self.assertEqual(assistant.extract_reply(json.dumps([{"text": "Resumo"}, {"text": "x"}])), "Resumo")
        self.assertEqual(assistant.extract_reply(json.dumps(["direto"])), "direto")

    def test_object_without_known_key_is_serialized(self):
        self.assertEqual(assistant.extract_reply(json.dumps({"foo": 1})), '{"foo": 1}')

    def test_empty_responses(self):
        self.assertEqual(assistant.extract_reply(""), assistant.EMPTY_RESPONSE_MESSAGE)
        self.assertEqual(assistant.extract_reply("[]"), assistant.EMPTY_RESPONSE_MESSAGE)
        self.assertEqual(assistant.extract_reply('""'), assistant.EMPTY_RESPONSE_MESSAGE)


class TestAskAssistant(unittest.TestCase):
    def test_not_configured(self):
        with patch("requests.post") as mock_post:
            reply = assistant.ask_assistant("Oi", {}, webhook_url="")
        self.assertEqual(reply, assistant.NOT_CONFIGURED_MESSAGE)
        mock_post.assert_not_called()

    @patch("requests.post")
    def test_posts_payload_and_returns_reply(self, mock_post):
        mock_response = MagicMock()
        mock_response.text = json.dumps({"response": "Você tem 2 contas atrasadas."})
        mock_post.return_value = mock_response
        history = [{"role": "user", "content": str(i)} for i in range(15)]

        reply = assistant.ask_assistant(
            "Como estão minhas contas?",
            {"balance": 10},
            history=history,
            webhook_url="http://localhost:5678/webhook/assistente",
        )

        self.assertEqual(reply, "Você tem 2 contas atrasadas.")
        mock_response.raise_for_status.assert_called_once()
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "http://localhost:5678/webhook/assistente")
        self.assertEqual(kwargs["headers"], {"Content-Type": "application/json"})
        payload = json.loads(kwargs["data"])
        self.assertEqual(payload["message"], "Como estão minhas contas?")
        self.assertEqual(payload["userName"], "Usuário")
        self.assertEqual(payload["financialContext"], {"balance": 10})
        self.assertEqual(len(payload["conversationHistory"]), assistant.HISTORY_SIZE)
        self.assertEqual(payload["conversationHistory"][0]["content"], "5")

    @patch("requests.post")
    def test_connection_error_returns_friendly_message(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("recusada")

        reply = assistant.ask_assistant("Oi", {}, user_name="Ana", webhook_url="http://localhost:5678/x")

        self.assertTrue(reply.startswith("❌ Erro ao conectar com o assistente."))
        self.assertIn("recusada", reply)

    @patch("requests.post")
    def test_http_error_returns_friendly_message(self, mock_post):
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("500 Server Error")
        mock_post.return_value = mock_response

        reply = assistant.ask_assistant("Oi", {}, webhook_url="http://localhost:5678/x")

        self.assertTrue(reply.startswith("❌ Erro ao conectar com o assistente."))


if __name__ == "__main__":
    unittest.main()
