# 🖥️ fxconv/cli/main.py
"""
🖥️ Entry-point консольного конвертера `fxconv`.

🔹 `convert AMOUNT FROM TO [--reverse]` — конвертація з курсом пари.
🔹 `rates [SEARCH]` — курси відносно бази, улюблені першими.
🔹 `favorite CODE` — додати/прибрати валюту з улюблених.
🔹 `base [CODE]` — показати або змінити базову валюту.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from rich.console import Console										# 🖨️ Кольоровий вивід
from rich.table import Table											# 📊 Таблиця курсів

# 🔠 Системні імпорти
import argparse
import asyncio
import sys
from typing import List, Optional

# 🧩 Внутрішні модулі проєкту
from fxconv.application.converter_session import ConverterSession
from fxconv.config.config_service import ConfigService
from fxconv.config.setup.container import Container, bootstrap_logging
from fxconv.domain.currency import FetchStatus, currency_name
from fxconv.errors import AppError
from fxconv.infrastructure.storage.json_storage import JsonFileKeyValueStore
from fxconv.infrastructure.storage.preference_store import PreferenceStore
from fxconv.shared.utils.logger import get_logger


logger = get_logger("cli")
console = Console()

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


# ================================
# 🧩 ПАРСЕР АРГУМЕНТІВ
# ================================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fxconv", description="Currency converter")
    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="convert an amount between two currencies")
    convert.add_argument("amount")
    convert.add_argument("from_currency", metavar="FROM")
    convert.add_argument("to_currency", metavar="TO")
    convert.add_argument(
        "--reverse",
        action="store_true",
        help="treat AMOUNT as the target-side amount",
    )

    rates = sub.add_parser("rates", help="list rates relative to the base currency")
    rates.add_argument("search", nargs="?", default="")

    favorite = sub.add_parser("favorite", help="toggle a favorite currency")
    favorite.add_argument("code")

    base = sub.add_parser("base", help="show or change the base currency")
    base.add_argument("code", nargs="?")
    return parser


# ================================
# 🧰 ДОПОМІЖНІ
# ================================
def _load_preferences(config: ConfigService) -> PreferenceStore:
    """Налаштування без мережевого стеку (для команд, яким курси не потрібні)."""
    storage = JsonFileKeyValueStore(config.get("files.preferences", "data/preferences.json"))
    return PreferenceStore.load(
        storage,
        locale=config.get("preferences.locale"),
        default_currency=config.get("preferences.default_currency", "USD") or "USD",
        russian_currency=config.get("preferences.russian_locale_currency", "RUB") or "RUB",
    )


def _report_failure(session: ConverterSession) -> int:
    console.print(f"[red]Не вдалося завантажити курси:[/red] {session.error or 'unknown error'}")
    return EXIT_FAILURE


# ================================
# 🚀 КОМАНДИ
# ================================
async def _cmd_convert(session: ConverterSession, args: argparse.Namespace) -> int:
    await (await session.start())
    if session.status is not FetchStatus.SUCCEEDED:
        return _report_failure(session)

    session.select_from(args.from_currency.upper())
    session.select_to(args.to_currency.upper())
    accepted = session.edit_to(args.amount) if args.reverse else session.edit_from(args.amount)
    if not accepted:
        console.print(f"[red]Некоректна сума:[/red] {args.amount!r}")
        return EXIT_USAGE

    pair = session.pair
    console.print(
        f"[bold]{pair.from_amount}[/bold] {pair.from_currency} = "
        f"[bold green]{pair.to_amount}[/bold green] {pair.to_currency}"
    )
    summary = session.rate_summary()
    if summary is not None:
        console.print(
            f"1 {summary.from_currency} = {summary.direct} {summary.to_currency}   "
            f"1 {summary.to_currency} = {summary.inverse} {summary.from_currency}",
            style="dim",
        )
    return EXIT_OK


async def _cmd_rates(session: ConverterSession, args: argparse.Namespace) -> int:
    await (await session.start())
    if session.status is not FetchStatus.SUCCEEDED:
        return _report_failure(session)

    base = session.preferences.base_currency
    table = Table(title=f"Курси відносно {base} ({currency_name(base)})")
    table.add_column("★")
    table.add_column("Код", style="bold")
    table.add_column("Назва")
    table.add_column(f"1 {base}", justify="right")
    table.add_column(f"→ {base}", justify="right")
    for item in session.currency_list(args.search):
        table.add_row(
            "★" if item.is_favorite else "",
            item.code,
            item.name,
            f"{item.rate:.4f}",
            f"{item.reverse_rate:.4f}",
        )
    console.print(table)
    return EXIT_OK


def _cmd_favorite(config: ConfigService, args: argparse.Namespace) -> int:
    code = args.code.upper()
    added = _load_preferences(config).toggle_favorite(code)
    console.print(f"★ {code} {'додано до' if added else 'прибрано з'} улюблених")
    return EXIT_OK


async def _cmd_set_base(session: ConverterSession, code: str) -> int:
    await session.rate_store.initialize()
    await session.set_base_currency(code)
    if session.status is not FetchStatus.SUCCEEDED:
        return _report_failure(session)
    console.print(f"Базова валюта: [bold]{code}[/bold] ({len(session.available_currencies())} валют)")
    return EXIT_OK


async def _run(config: ConfigService, args: argparse.Namespace) -> int:
    container = Container(config)
    try:
        if args.command == "convert":
            return await _cmd_convert(container.session, args)
        if args.command == "rates":
            return await _cmd_rates(container.session, args)
        return await _cmd_set_base(container.session, args.code.upper())
    finally:
        await container.session.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = ConfigService()
    bootstrap_logging(config)

    if args.command == "favorite":
        return _cmd_favorite(config, args)
    if args.command == "base" and not args.code:
        base = _load_preferences(config).base_currency
        console.print(f"Базова валюта: [bold]{base}[/bold] ({currency_name(base)})")
        return EXIT_OK

    try:
        return asyncio.run(_run(config, args))
    except AppError as exc:
        logger.error("🚨 %s", exc.message, extra=exc.to_log_extra())
        console.print(f"[red]{exc.message}[/red]")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
