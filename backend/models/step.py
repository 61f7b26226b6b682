# Role: Central enum of frame steps. Keeps the system consistent across:
# state decoding, the transition table, descriptor layouts, and image endpoints.

from enum import Enum


class Step(str, Enum):
    INITIAL = "initial"
    CONNECT_WALLET = "connectWallet"
    PORTFOLIO_DISPLAY = "portfolioDisplay"
    COMMUNITY_RATING = "communityRating"
    EMOJI_REACTIONS = "emojiReactions"
    RESULTS_DISPLAY = "resultsDisplay"
    NFT_MINTING = "nftMinting"
    SHARE_RESULTS = "shareResults"
