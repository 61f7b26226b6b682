# Role: Portfolio shape shared by the portfolio source and the image renderer,
# plus the fixed demonstration dataset used whenever the live source is unavailable.

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class TokenHolding(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    balance: float = 0.0
    balance_usd: float = 0.0
    logo_url: str = ""


class Portfolio(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str = ""
    tokens: List[TokenHolding] = Field(default_factory=list)

    def total_usd(self) -> float:
        return sum(t.balance_usd for t in self.tokens)


MOCK_PORTFOLIO = Portfolio(
    tokens=[
        TokenHolding(
            symbol="ETH",
            name="Ethereum",
            balance=1.5,
            balance_usd=4500.0,
            logo_url="https://assets.coingecko.com/coins/images/279/small/ethereum.png",
        ),
        TokenHolding(
            symbol="USDC",
            name="USD Coin",
            balance=2500.0,
            balance_usd=2500.0,
            logo_url="https://assets.coingecko.com/coins/images/6319/small/usdc.png",
        ),
        TokenHolding(
            symbol="UNI",
            name="Uniswap",
            balance=120.0,
            balance_usd=840.0,
            logo_url="https://assets.coingecko.com/coins/images/12504/small/uni.jpg",
        ),
        TokenHolding(
            symbol="LINK",
            name="Chainlink",
            balance=45.0,
            balance_usd=630.0,
            logo_url="https://assets.coingecko.com/coins/images/877/small/chainlink-new-logo.png",
        ),
        TokenHolding(
            symbol="ARB",
            name="Arbitrum",
            balance=800.0,
            balance_usd=640.0,
            logo_url="https://assets.coingecko.com/coins/images/16547/small/arb.jpg",
        ),
    ]
)
