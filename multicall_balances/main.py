import sys
import json
import asyncio
import logging
import argparse
from pathlib import Path
from dataclasses import asdict, is_dataclass

from . import api
from .config import AppConfig, load_env
from .core.log import setup_logging
from .errors import MulticallBalancesError
from .utils.iohelpers import read_text
from .utils.parsing import parse_addresses_from_text

log = logging.getLogger("main")


def to_json(o):
    if is_dataclass(o): return asdict(o)
    if hasattr(o, "__dict__"): return o.__dict__
    return o


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="multicall-balances", description="Batched ERC20 balances and spot prices")
    p.add_argument("--rpc-url")
    p.add_argument("--chunk-size", type=int)
    p.add_argument("--file", help="read extra addresses (0x...) from a text file")
    p.add_argument("--debug", action="store_true")
    p.add_argument("--log-file")

    sub = p.add_subparsers(dest="command", required=True)
    s = sub.add_parser("tokens", help="balances of one account across tokens")
    s.add_argument("account")
    s.add_argument("addresses", nargs="*", metavar="token")
    s = sub.add_parser("accounts", help="balances of one token across accounts")
    s.add_argument("token")
    s.add_argument("addresses", nargs="*", metavar="account")
    s = sub.add_parser("info", help="balances with symbol/name/decimals of one account across tokens")
    s.add_argument("account")
    s.add_argument("addresses", nargs="*", metavar="token")
    sub.add_parser("native-price", help="native asset price, 18-decimal fixed point")
    s = sub.add_parser("token-price", help="token prices, 18-decimal fixed point")
    s.add_argument("addresses", nargs="*", metavar="token")
    return p


def apply_overrides(cfg: AppConfig, a: argparse.Namespace) -> AppConfig:
    updates = {}
    if a.rpc_url:
        updates["rpc_url"] = a.rpc_url
    if a.chunk_size is not None:
        updates["chunk_size"] = a.chunk_size
    if a.debug:
        updates["debug"] = True
    if a.log_file:
        updates["log_file"] = a.log_file
    return AppConfig.model_validate({**cfg.model_dump(), **updates}) if updates else cfg


def collect_addresses(a: argparse.Namespace) -> list[str]:
    addresses = list(getattr(a, "addresses", []) or [])
    if a.file:
        addresses += parse_addresses_from_text(read_text(Path(a.file)))
    return addresses


async def run(cfg: AppConfig, a: argparse.Namespace):
    addresses = collect_addresses(a)
    opts = dict(chunk_size=cfg.chunk_size, multicall_address=cfg.multicall_address,
                request_timeout=cfg.call_timeout)
    log.info("%s via %s (%d addresses)", a.command, cfg.rpc_url, len(addresses))

    if a.command == "tokens":
        return await api.balances_for_tokens_of_account(a.account, addresses, cfg.rpc_url, **opts)
    if a.command == "accounts":
        return await api.balances_for_accounts_of_token(addresses, a.token, cfg.rpc_url, **opts)
    if a.command == "info":
        return await api.token_info_for_account(a.account, addresses, cfg.rpc_url, **opts)
    if a.command == "native-price":
        return str(await api.native_price(cfg.rpc_url, request_timeout=cfg.call_timeout))
    if a.command == "token-price":
        prices = await api.tokens_price(addresses, cfg.rpc_url, request_timeout=cfg.call_timeout)
        return [{"token": token, "price": str(price)} for token, price in zip(addresses, prices)]
    raise ValueError(f"unknown command {a.command!r}")


def main(argv: list[str] | None = None) -> int:
    a = build_parser().parse_args(argv)
    try:
        cfg = apply_overrides(load_env(), a)
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        setup_logging(a.debug, a.log_file)
        log.error("invalid configuration: %s", e)
        return 1
    setup_logging(cfg.debug, cfg.log_file or None)

    try:
        result = asyncio.run(run(cfg, a))
    except MulticallBalancesError as e:
        log.error("%s: %s", type(e).__name__, e)
        return 1

    print(json.dumps(result, default=to_json, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
