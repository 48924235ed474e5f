# 🚀 rate_converter/main.py
"""
🚀 Точка входу CLI `rate-converter`.

🔹 `convert` — конвертація суми між USD / EUR / RUB / KGS.
🔹 `rate` / `refresh` — стан і примусове оновлення живого курсу USD→KGS.
🔹 `admin-set-rates` / `admin-password` — дії адміністратора за паролем.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import typer                                                        # 🧰 CLI-команди
from rich import print as rprint                                    # 🎨 Кольоровий вивід

# 🔠 Системні імпорти
import asyncio
from datetime import datetime
from typing import Awaitable, Optional, TypeVar

# 🧩 Внутрішні модулі проєкту
from rate_converter.config.container import Container
from rate_converter.shared.errors import AppError

app = typer.Typer(help="Currency converter with a live USD→KGS rate and admin-managed offline rates")

T = TypeVar("T")


def build_container() -> Container:
    return Container(init_logging=True)


def _run(coro: Awaitable[T]) -> T:
    """Виконує корутину; доменні помилки → червоне повідомлення і код 1."""
    try:
        return asyncio.run(coro)  # type: ignore[arg-type]
    except AppError as e:
        rprint(f"[bold red]❌ {e.message}[/bold red]")
        raise typer.Exit(code=1) from e


def _format_ts(updated_at_ms: Optional[int]) -> str:
    if updated_at_ms is None:
        return "-"
    return datetime.fromtimestamp(updated_at_ms / 1000).strftime("%d.%m.%Y %H:%M")


# ================================
# 🔁 КОНВЕРТАЦІЯ
# ================================
@app.command("convert")
def convert(
    amount: str = typer.Argument(..., help="Amount, e.g. 100 or 150,50"),
    from_code: str = typer.Argument(..., help="Source currency: usd | eur | rub | kgs"),
    to_code: str = typer.Argument(..., help="Target currency: usd | eur | rub | kgs"),
    offline: bool = typer.Option(False, "--offline", help="Skip the live rate refresh"),
):
    container = build_container()

    async def _convert():
        if not offline:
            await container.converter.warm_up()
        return await container.converter.convert(amount, from_code, to_code)

    result = _run(_convert())
    source = "live" if result.live_rate_used else "offline"
    rprint(
        f"[bold green]{result.amount:,.2f} {result.from_code.upper()} = "
        f"{result.result:,.2f} {result.to_code.upper()}[/bold green] "
        f"(1 {result.from_code.upper()} = {result.rate:.4f} {result.to_code.upper()}, {source})"
    )


# ================================
# 📡 ЖИВИЙ КУРС
# ================================
@app.command("rate")
def rate(
    offline: bool = typer.Option(False, "--offline", help="Show the cached rate without refreshing it"),
):
    container = build_container()

    async def _status():
        if not offline:
            await container.converter.warm_up()
        return await container.converter.rate_status()

    status = _run(_status())
    if status.rate is None:
        rprint(f"[yellow]Live USD/KGS rate not loaded yet (offline fallback {status.offline_kgs_per_usd:.4f})[/yellow]")
        return
    rprint(f"[bold]1 USD = {status.rate:.4f} KGS[/bold]")
    if status.inverse_rate is not None:
        rprint(f"1 KGS = {status.inverse_rate:.6f} USD")
    stale_note = " [yellow](stale)[/yellow]" if status.is_stale else ""
    rprint(f"Updated: {_format_ts(status.updated_at_ms)}{stale_note}")
    if not status.live_enabled:
        rprint("[yellow]Live rate is disabled; offline rates are used for conversion[/yellow]")


@app.command("refresh")
def refresh():
    container = build_container()
    value = _run(container.live_rate_cache.refresh(force=True))
    rprint(f"[bold green]1 USD = {value:.4f} KGS[/bold green]")


# ================================
# 🔐 АДМІНІСТРАТОР
# ================================
@app.command("admin-set-rates")
def admin_set_rates(
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Admin password"),
    eur: str = typer.Option(..., help="EUR per 1 USD"),
    rub: str = typer.Option(..., help="RUB per 1 USD"),
    kgs: str = typer.Option(..., help="KGS per 1 USD (offline)"),
    live: bool = typer.Option(True, "--live/--no-live", help="Prefer the live USD→KGS rate"),
):
    container = build_container()

    async def _save() -> bool:
        if not await container.admin.login(password):
            return False
        await container.admin.save_rates(live, eur, rub, kgs)
        return True

    if not _run(_save()):
        rprint("[bold red]❌ Wrong password[/bold red]")
        raise typer.Exit(code=1)
    rprint("[bold green]Saved[/bold green]")


@app.command("admin-password")
def admin_password(
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Current admin password"),
    new: str = typer.Option(..., prompt=True, hide_input=True, help="New password"),
    confirm: str = typer.Option(..., prompt=True, hide_input=True, help="Repeat the new password"),
):
    container = build_container()

    async def _change() -> bool:
        if not await container.admin.login(password):
            return False
        await container.admin.change_password(new, confirm)
        return True

    if not _run(_change()):
        rprint("[bold red]❌ Wrong password[/bold red]")
        raise typer.Exit(code=1)
    rprint("[bold green]Password changed[/bold green]")


if __name__ == "__main__":
    app()
