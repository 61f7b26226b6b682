# Role: External tool adapter for wallet portfolios. Calls the Zapper token-balances API and returns a structured
# result. The frame never fails because of this source: get_portfolio_or_mock() falls back to MOCK_PORTFOLIO.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

import backend.config as config
from backend.models.portfolio import MOCK_PORTFOLIO, Portfolio, TokenHolding


@dataclass(frozen=True)
class PortfolioToolResult:
    ok: bool
    data: Optional[Portfolio] = None
    error: Optional[str] = None


class PortfolioClient:
    BASE_URL = "https://api.zapper.xyz/v2"
    _TIMEOUT_SECONDS = 10

    def __init__(self, api_key: Optional[str] = None) -> None:
        self.api_key = api_key if api_key is not None else config.ZAPPER_API_KEY

    def fetch_portfolio(self, address: str) -> PortfolioToolResult:
        # 1) Validate inputs (address + API key)
        # 2) Call /balances/tokens for the address
        # 3) Normalize token rows, biggest USD value first
        if not address or not address.strip():
            return PortfolioToolResult(ok=False, error="Missing wallet address")
        if not self.api_key:
            return PortfolioToolResult(ok=False, error="ZAPPER_API_KEY is not configured")

        address = address.strip().lower()

        try:
            r = requests.get(
                f"{self.BASE_URL}/balances/tokens",
                params={"addresses[]": address},
                auth=(self.api_key, ""),
                timeout=self._TIMEOUT_SECONDS,
            )
            r.raise_for_status()
            payload = r.json()

            rows = payload.get(address) if isinstance(payload, dict) else None
            tokens = self._parse_tokens(rows or [])
            if not tokens:
                return PortfolioToolResult(ok=False, error=f"No token balances returned for {address}")

            if config.DEBUG:
                print("\n--- PORTFOLIO TOOL ---")
                print("ADDRESS:", address)
                print("TOKENS:", [(t.symbol, t.balance, t.balance_usd) for t in tokens])
                print("----------------------\n")

            return PortfolioToolResult(ok=True, data=Portfolio(address=address, tokens=tokens))

        except requests.RequestException as e:
            return PortfolioToolResult(ok=False, error=f"Zapper request failed: {e}")
        except (TypeError, ValueError, AttributeError) as e:
            return PortfolioToolResult(ok=False, error=f"Bad Zapper payload: {e}")

    def _parse_tokens(self, rows: List[Dict[str, Any]]) -> List[TokenHolding]:
        tokens: List[TokenHolding] = []
        for row in rows:
            token = row.get("token") or {}
            symbol = token.get("symbol")
            if not symbol:
                continue
            tokens.append(
                TokenHolding(
                    symbol=str(symbol),
                    name=str(token.get("name") or symbol),
                    balance=float(token.get("balance") or 0.0),
                    balance_usd=float(token.get("balanceUSD") or 0.0),
                    logo_url=str(token.get("imgUrl") or ""),
                )
            )
        tokens.sort(key=lambda t: t.balance_usd, reverse=True)
        return tokens


def get_portfolio_or_mock(address: str, client: Optional[PortfolioClient] = None) -> Portfolio:
    result = (client or PortfolioClient()).fetch_portfolio(address)
    if result.ok and result.data is not None:
        return result.data

    if config.DEBUG:
        print("PORTFOLIO: using demo dataset:", result.error)
    return MOCK_PORTFOLIO.model_copy(update={"address": address})
