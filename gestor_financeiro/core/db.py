from supabase import create_client, Client
from gestor_financeiro.config import SUPABASE_URL, SUPABASE_KEY
from gestor_financeiro.core.models import Account, DbResult, Income, PurchaseVoucher, ACCOUNT_STATUSES
from typing import Any, Dict, List

ACCOUNTS_TABLE = "accounts"
INCOMES_TABLE = "incomes"
VOUCHERS_TABLE = "purchase_vouchers"

# Campos que a edição de uma conta pode alterar (installments e user_id não mudam)
ACCOUNT_EDITABLE_FIELDS = (
    "company_name", "company_initials", "total_value", "installment_value",
    "due_date", "category", "status",
)
INCOME_EDITABLE_FIELDS = ("description", "value", "date", "category")


def get_supabase_client() -> Client:
    """Retorna uma instância do cliente Supabase."""
    return create_client(SUPABASE_URL, SUPABASE_KEY)


def _editable(fields: Dict[str, Any], allowed) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k in allowed and v is not None}


# --- Funções para Contas a Pagar ---
def list_accounts(supabase_client: Client, user_id: str) -> DbResult:
    """Obtém as contas do usuário, ordenadas pelo vencimento (mais antigo primeiro)."""
    try:
        response = (
            supabase_client.table(ACCOUNTS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("due_date")
            .execute()
        )
        return DbResult.success([Account.from_row(row) for row in response.data])
    except Exception as e:
        print(f"Erro ao obter contas do Supabase: {e}")
        return DbResult.failure(str(e))


def create_accounts(supabase_client: Client, user_id: str, accounts: List[Account]) -> DbResult:
    """
    Insere todas as linhas de um parcelamento em um único insert.
    Se o banco devolver menos linhas do que foram enviadas, as criadas são
    removidas e a operação falha, para nunca deixar um plano pela metade.
    """
    if not accounts:
        return DbResult.failure("Nenhuma parcela para criar.")

    rows = [account.to_row(user_id) for account in accounts]
    try:
        response = supabase_client.table(ACCOUNTS_TABLE).insert(rows).execute()
    except Exception as e:
        print(f"Erro ao adicionar contas ao Supabase: {e}")
        return DbResult.failure(str(e))

    created = response.data or []
    if len(created) != len(rows):
        print(f"Erro ao adicionar contas: {len(created)} de {len(rows)} parcelas criadas. Desfazendo.")
        created_ids = [row["id"] for row in created if row.get("id")]
        if created_ids:
            try:
                supabase_client.table(ACCOUNTS_TABLE).delete().in_("id", created_ids).execute()
            except Exception as e:
                print(f"Erro ao desfazer parcelas criadas: {e}")
        return DbResult.failure("Parcelamento incompleto; nenhuma parcela foi mantida.")

    return DbResult.success([Account.from_row(row) for row in created])


def update_account(supabase_client: Client, account_id: str, fields: Dict[str, Any]) -> DbResult:
    """Atualiza uma única parcela. Não regenera o parcelamento."""
    update_data = _editable(fields, ACCOUNT_EDITABLE_FIELDS)
    if not update_data:
        return DbResult.failure("Nenhum campo para atualizar.")
    if "status" in update_data and update_data["status"] not in ACCOUNT_STATUSES:
        return DbResult.failure(f"Status inválido: {update_data['status']}")
    try:
        supabase_client.table(ACCOUNTS_TABLE).update(update_data).eq("id", account_id).execute()
        return DbResult.success(update_data)
    except Exception as e:
        print(f"Erro ao atualizar conta {account_id}: {e}")
        return DbResult.failure(str(e))


def update_account_status(supabase_client: Client, account_id: str, status: str) -> DbResult:
    return update_account(supabase_client, account_id, {"status": status})


def delete_account(supabase_client: Client, account_id: str) -> DbResult:
    try:
        supabase_client.table(ACCOUNTS_TABLE).delete().eq("id", account_id).execute()
        return DbResult.success(account_id)
    except Exception as e:
        print(f"Erro ao excluir conta {account_id}: {e}")
        return DbResult.failure(str(e))


# --- Funções para Entradas ---
def list_incomes(supabase_client: Client, user_id: str) -> DbResult:
    """Obtém as entradas do usuário, da mais recente para a mais antiga."""
    try:
        response = (
            supabase_client.table(INCOMES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("date", desc=True)
            .execute()
        )
        return DbResult.success([Income.from_row(row) for row in response.data])
    except Exception as e:
        print(f"Erro ao obter entradas do Supabase: {e}")
        return DbResult.failure(str(e))


def create_income(supabase_client: Client, user_id: str, income: Income) -> DbResult:
    try:
        response = supabase_client.table(INCOMES_TABLE).insert([income.to_row(user_id)]).execute()
        if not response.data:
            return DbResult.failure("Entrada não retornada pelo banco.")
        return DbResult.success(Income.from_row(response.data[0]))
    except Exception as e:
        print(f"Erro ao adicionar entrada ao Supabase: {e}")
        return DbResult.failure(str(e))


def update_income(supabase_client: Client, income_id: str, fields: Dict[str, Any]) -> DbResult:
    update_data = _editable(fields, INCOME_EDITABLE_FIELDS)
    if not update_data:
        return DbResult.failure("Nenhum campo para atualizar.")
    try:
        supabase_client.table(INCOMES_TABLE).update(update_data).eq("id", income_id).execute()
        return DbResult.success(update_data)
    except Exception as e:
        print(f"Erro ao atualizar entrada {income_id}: {e}")
        return DbResult.failure(str(e))


def set_income_received(supabase_client: Client, income_id: str, received: bool) -> DbResult:
    try:
        supabase_client.table(INCOMES_TABLE).update({"received": received}).eq("id", income_id).execute()
        return DbResult.success(received)
    except Exception as e:
        print(f"Erro ao marcar entrada {income_id} como recebida: {e}")
        return DbResult.failure(str(e))


def delete_income(supabase_client: Client, income_id: str) -> DbResult:
    try:
        supabase_client.table(INCOMES_TABLE).delete().eq("id", income_id).execute()
        return DbResult.success(income_id)
    except Exception as e:
        print(f"Erro ao excluir entrada {income_id}: {e}")
        return DbResult.failure(str(e))


# --- Funções para Compras e Vales ---
def list_vouchers(supabase_client: Client, user_id: str) -> DbResult:
    try:
        response = (
            supabase_client.table(VOUCHERS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("date", desc=True)
            .execute()
        )
        return DbResult.success([PurchaseVoucher.from_row(row) for row in response.data])
    except Exception as e:
        print(f"Erro ao obter compras e vales do Supabase: {e}")
        return DbResult.failure(str(e))


def create_voucher(supabase_client: Client, user_id: str, voucher: PurchaseVoucher) -> DbResult:
    try:
        response = supabase_client.table(VOUCHERS_TABLE).insert([voucher.to_row(user_id)]).execute()
        if not response.data:
            return DbResult.failure("Lançamento não retornado pelo banco.")
        return DbResult.success(PurchaseVoucher.from_row(response.data[0]))
    except Exception as e:
        print(f"Erro ao adicionar compra/vale ao Supabase: {e}")
        return DbResult.failure(str(e))


def delete_voucher(supabase_client: Client, voucher_id: str) -> DbResult:
    try:
        supabase_client.table(VOUCHERS_TABLE).delete().eq("id", voucher_id).execute()
        return DbResult.success(voucher_id)
    except Exception as e:
        print(f"Erro ao excluir compra/vale {voucher_id}: {e}")
        return DbResult.failure(str(e))
