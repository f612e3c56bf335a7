"""Built-in chain table.

Uniswap deployments on the chains supported out of the box. Replace the
whole table with DEXQUOTE_CHAINS_FILE, or a single endpoint with
DEXQUOTE_RPC_URL_<CHAIN>.
"""

DEFAULT_CHAINS: dict[str, dict[str, object]] = {
    "eth": {
        "rpc_url": "https://eth.llamarpc.com",
        "native_symbol": "ETH",
        "wrapped_native": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",  # WETH
        "v2_factory": "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f",
        "v2_router": "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",
        "v3_factory": "0x1F98431c8aD98523631AE4a59f267346ea31F984",
        "v3_quoter": "0xb27308f9F90D607463bb33eA1BeBb41C27CE5AB6",  # Quoter (V1)
        "v3_quoter_version": 1,
        "v3_swap_router": "0xE592427A0AEce92De3Edee1F18E0157C05861564",
    },
    "bsc": {
        "rpc_url": "https://bsc-dataseed.binance.org",
        "native_symbol": "BNB",
        "wrapped_native": "0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c",  # WBNB
        "v2_factory": "0x8909Dc15e40173Ff4699343b6eB8132c65e18eC6",
        "v2_router": "0x8357227D4eDc78991Db6FDB9bD6ADE250536dE1d",
        "v3_factory": "0xdB1d10011AD0Ff90774D0C6Bb92e5C5c8b4461F7",
        "v3_quoter": "0x78D78E420Da98ad378D7799bE8f4AF69033EB077",  # QuoterV2
        "v3_quoter_version": 2,
    },
    "base": {
        "rpc_url": "https://mainnet.base.org",
        "native_symbol": "ETH",
        "wrapped_native": "0x4200000000000000000000000000000000000006",  # WETH
        "v2_factory": "0x8909Dc15e40173Ff4699343b6eB8132c65e18eC6",
        "v2_router": "0x4752ba5DBc23f44D87826276BF6Fd6b1C372aD24",
        "v3_factory": "0x33128a8fC17869897dcE68Ed026d694621f6FDfD",
        "v3_quoter": "0x3d4e44Eb1374240CE5F1B871ab261CD16335B76a",  # QuoterV2
        "v3_quoter_version": 2,
    },
    "arb": {
        "rpc_url": "https://arb1.arbitrum.io/rpc",
        "native_symbol": "ETH",
        "wrapped_native": "0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",  # WETH
        "v2_factory": "0xf1D7CC64Fb4452F05c498126312eBE29f30Fbcf9",
        "v2_router": "0x4752ba5DBc23f44D87826276BF6Fd6b1C372aD24",
        "v3_factory": "0x1F98431c8aD98523631AE4a59f267346ea31F984",
        "v3_quoter": "0x61fFE014bA17989E743c5F6cB21bF9697530B21e",  # QuoterV2
        "v3_quoter_version": 2,
        "v3_swap_router": "0xE592427A0AEce92De3Edee1F18E0157C05861564",
    },
}

__all__ = ["DEFAULT_CHAINS"]
