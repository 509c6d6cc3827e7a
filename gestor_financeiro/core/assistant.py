import json
from typing import Any, Dict, List, Union

import requests

from gestor_financeiro.config import ASSISTANT_WEBHOOK_URL, ASSISTANT_TIMEOUT
from gestor_financeiro.core.models import (
    Account,
    Income,
    STATUS_OVERDUE,
    STATUS_PAID,
    STATUS_PENDING,
)

# Campos em que o n8n costuma devolver a resposta, em ordem de preferência
RESPONSE_KEYS = ("response", "message", "output", "text", "content", "result", "answer")
HISTORY_SIZE = 10

NOT_CONFIGURED_MESSAGE = (
    "⚠️ O webhook do assistente ainda não foi configurado. "
    "Adicione `ASSISTANT_WEBHOOK_URL` no arquivo `.env` para ativar o assistente de IA."
)
EMPTY_RESPONSE_MESSAGE = "Resposta recebida, mas sem conteúdo."


def build_financial_context(accounts: List[Account], incomes: List[Income]) -> Dict[str, Any]:
    """Resumo das finanças enviado junto com cada pergunta ao assistente."""
    total_expenses = sum(float(acc.installment_value or 0) for acc in accounts)
    total_incomes = sum(float(inc.value or 0) for inc in incomes)
    categories = []
    for acc in accounts:
        if acc.category not in categories:
            categories.append(acc.category)

    return {
        "totalExpenses": total_expenses,
        "totalIncomes": total_incomes,
        "balance": total_incomes - total_expenses,
        "pendingAccounts": sum(1 for acc in accounts if acc.status == STATUS_PENDING),
        "overdueAccounts": sum(1 for acc in accounts if acc.status == STATUS_OVERDUE),
        "paidAccounts": sum(1 for acc in accounts if acc.status == STATUS_PAID),
        "totalAccounts": len(accounts),
        "categories": categories,
        "recentAccounts": [
            {
                "company": acc.company_name,
                "value": acc.installment_value,
                "dueDate": acc.due_date,
                "status": acc.status,
            }
            for acc in accounts[:5]
        ],
    }


def extract_reply(response_text: str) -> str:
    """
    Extrai o texto da resposta do webhook. Aceita texto puro, uma string JSON,
    uma lista (usa o primeiro item) ou um objeto com um dos RESPONSE_KEYS.
    """
    try:
        data = json.loads(response_text)
    except (json.JSONDecodeError, TypeError):
        return response_text or EMPTY_RESPONSE_MESSAGE

    if isinstance(data, list):
        data = data[0] if data else None
        if isinstance(data, str):
            return data or EMPTY_RESPONSE_MESSAGE
    if isinstance(data, str):
        return data or EMPTY_RESPONSE_MESSAGE
    if isinstance(data, dict):
        for key in RESPONSE_KEYS:
            if data.get(key):
                return str(data[key])
        return json.dumps(data, ensure_ascii=False)
    if data is None:
        return EMPTY_RESPONSE_MESSAGE
    return json.dumps(data, ensure_ascii=False)


def ask_assistant(
    message: str,
    financial_context: Dict[str, Any],
    history: Union[List[Dict[str, str]], None] = None,
    user_name: Union[str, None] = None,
    webhook_url: str = ASSISTANT_WEBHOOK_URL,
) -> str:
    """Envia a pergunta e o contexto financeiro para o webhook do n8n."""
    if not webhook_url:
        return NOT_CONFIGURED_MESSAGE

    payload = {
        "message": message,
        "userName": user_name or "Usuário",
        "financialContext": financial_context,
        "conversationHistory": (history or [])[-HISTORY_SIZE:],
    }
    try:
        response = requests.post(
            webhook_url,
            headers={"Content-Type": "application/json"},
            data=json.dumps(payload),
            timeout=ASSISTANT_TIMEOUT,
        )
        response.raise_for_status()
        return extract_reply(response.text)
    except requests.exceptions.RequestException as e:
        print(f"Erro ao conectar com o assistente: {e}")
        return (
            "❌ Erro ao conectar com o assistente.\n\n"
            f"Detalhes: {e}\n\n"
            "Dicas:\n• Verifique se o n8n está rodando\n• Confirme a URL do webhook"
        )
