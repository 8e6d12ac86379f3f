from dataclasses import dataclass
from enum import Enum

from web3 import AsyncWeb3

from .errors import UnsupportedChainError


class ChainId(Enum):
    """Blockchain chain IDs"""
    ETHEREUM = 1
    BSC = 56
    POLYGON = 137
    ARBITRUM = 42161
    AVALANCHE = 43114


@dataclass(frozen=True)
class ChainConfig:
    chain_id: ChainId
    name: str
    native_symbol: str
    price_feed_address: str  # <native>/USD aggregator, 8 decimals
    router_address: str  # UniswapV2-style router exposing getAmountsOut
    wrapped_native_address: str


def _chain(chain_id: ChainId, name: str, native_symbol: str, feed: str, router: str, wrapped: str) -> ChainConfig:
    return ChainConfig(
        chain_id=chain_id,
        name=name,
        native_symbol=native_symbol,
        price_feed_address=AsyncWeb3.to_checksum_address(feed),
        router_address=AsyncWeb3.to_checksum_address(router),
        wrapped_native_address=AsyncWeb3.to_checksum_address(wrapped),
    )


CHAINS: dict[ChainId, ChainConfig] = {
    ChainId.ETHEREUM: _chain(
        ChainId.ETHEREUM, "Ethereum", "ETH",
        feed="0x5f4eC3Df9cbd43714FE2740f5E3616155c5b8419",
        router="0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",  # Uniswap V2
        wrapped="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
    ),
    ChainId.BSC: _chain(
        ChainId.BSC, "BSC", "BNB",
        feed="0x0567F2323251f0Aab15c8dFb1967E4e8A7D42aeE",
        router="0x10ED43C718714eb63d5aA57B78B54704E256024E",  # PancakeSwap V2
        wrapped="0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c",
    ),
    ChainId.POLYGON: _chain(
        ChainId.POLYGON, "Polygon", "MATIC",
        feed="0xAB594600376Ec9fD91F8e885dADF0CE036862dE0",
        router="0xa5E0829CaCEd8fFDD4De3c43696c57F7D7A678ff",  # QuickSwap
        wrapped="0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",
    ),
    ChainId.ARBITRUM: _chain(
        ChainId.ARBITRUM, "Arbitrum", "ETH",
        feed="0x639Fe6ab55C921f74e7fac1ee960C0B6293ba612",
        router="0x1b02dA8Cb0d097eB8D57A175b88c7D8b47997506",  # SushiSwap
        wrapped="0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",
    ),
    ChainId.AVALANCHE: _chain(
        ChainId.AVALANCHE, "Avalanche", "AVAX",
        feed="0x0A77230d17318075983913bC2145DB16C7366156",
        router="0x60aE616a2155Ee3d9A68541Ba4544862310933d4",  # Trader Joe
        wrapped="0xB31f66AA3C1e785363F0875A1B74E27b85FD66c7",
    ),
}


def get_chain(chain_id: int) -> ChainConfig:
    try:
        return CHAINS[ChainId(chain_id)]
    except (ValueError, KeyError):
        raise UnsupportedChainError(chain_id) from None
