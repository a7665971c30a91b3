"""MCP prompts for TrueLayer payment workflows."""

# pyright: reportUnusedFunction=false

from fastmcp import FastMCP


def register(app: FastMCP) -> None:
    """Register prompts on the provided app instance."""

    @app.prompt(
        name="Reconcile Transactions",
        description="Create a prompt to reconcile recent merchant account transactions.",
        tags={"reconciliation", "transactions"},
    )
    def reconcile_transactions(days: int = 30) -> str:
        return (
            f"Please reconcile the merchant account transactions from the last {days} days. "
            "Use the truelayer-list-transactions tool, following the pagination cursor until all pages are read. "
            "Group the results by status and type, total the amounts per currency, "
            "and flag any failed or pending transactions."
        )

    @app.prompt(
        name="Investigate Payment",
        description="Investigate the state of a specific payment.",
        tags={"troubleshooting", "payments"},
    )
    def investigate_payment(payment_id: str) -> str:
        return (
            f"Please investigate the payment '{payment_id}'. "
            "Use the truelayer-get-payment tool to retrieve it, explain its current status, "
            "and if it failed, summarize the failure stage and reason."
        )

    @app.prompt(
        name="Prepare Payout",
        description="Walk through the checks before creating a payout.",
        tags={"payouts"},
    )
    def prepare_payout(amount_in_minor: int, currency: str = "GBP", beneficiary_name: str = "") -> str:
        prompt = f"I want to pay out {amount_in_minor} (minor units) {currency}"
        if beneficiary_name:
            prompt += f" to '{beneficiary_name}'"
        prompt += (
            ". Use truelayer-get-merchant-account to confirm the merchant account, "
            "confirm the beneficiary account details with me, "
            "and only then call truelayer-create-payout. Report the returned payout id."
        )
        return prompt


__all__ = ["register"]
