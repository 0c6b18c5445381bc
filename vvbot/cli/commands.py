"""
vvbot 命令行接口 (CLI)

本模块使用 Typer 框架定义 vvbot 的命令行命令。
"""

import asyncio
import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from vvbot import __logo__, __version__

app = typer.Typer(
    name="vvbot",
    help=f"{__logo__} vvbot - QQ group quote picture bot",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    """版本号回调函数，当用户输入 --version 时触发"""
    if value:
        console.print(f"{__logo__} vvbot v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True
    ),
):
    """
    vvbot - QQ group quote picture bot
    """
    pass


def setup_logging(level: str) -> None:
    """只在入口处配置一次 loguru 输出。"""
    logger.remove()
    logger.add(sys.stderr, level=level)


def _load_config_or_exit(config_path: Path | None):
    from vvbot.config.loader import ConfigError, load_config

    try:
        return load_config(config_path)
    except ConfigError as e:
        logger.error(str(e))
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


# ============================================================================
# 初始化命令
# ============================================================================


@app.command()
def init(
    config_path: Path = typer.Option(Path("config.yml"), "--config", "-c", help="Config file to create"),
    qq: str = typer.Option(..., "--qq", prompt="Bot QQ number", help="The bot's own QQ number"),
):
    """
    生成示例配置文件

    写入的文件使用 camelCase 键名，按需修改 access token 和 NapCat 地址后即可启动。
    """
    from vvbot.config.loader import save_config
    from vvbot.config.schema import Config

    if config_path.exists():
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    try:
        config = Config(qq=qq)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"[green]✓[/green] Created config at {config_path}")
    console.print("\nNext steps:")
    console.print(f"  1. Set [cyan]napcatAccessToken[/cyan] and the NapCat API address in {config_path}")
    console.print(f"  2. Point NapCat's HTTP client webhook to [cyan]http://<this-host>:{config.listen_port}/[/cyan]")
    console.print("  3. Run: [cyan]vvbot serve[/cyan]")


# ============================================================================
# 服务命令
# ============================================================================


@app.command()
def serve(
    config_path: Path = typer.Option(Path("config.yml"), "--config", "-c", help="Config file"),
    port: int = typer.Option(None, "--port", "-p", help="Override the listen port"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    启动 webhook 服务，接收 NapCat 推送的群消息

    使用方式：
        vvbot serve                      # 读取 ./config.yml
        vvbot serve -c /etc/vvbot.yml    # 指定配置文件
        vvbot serve --port 9000          # 覆盖监听端口
    """
    import uvicorn

    from vvbot.server.webhook import create_app

    config = _load_config_or_exit(config_path)
    setup_logging("DEBUG" if verbose else config.log_level)

    listen_port = port or config.listen_port
    app_ = create_app(config)

    logger.info(f"Starting server for napcat messages on http://{config.listen_host}:{listen_port}")
    console.print(f"{__logo__} Bot QQ {config.qq}, NapCat API at {config.napcat_api_host}:{config.napcat_api_port}")

    uvicorn.run(app_, host=config.listen_host, port=listen_port, access_log=False)


# ============================================================================
# 诊断命令
# ============================================================================


@app.command()
def search(
    keyword: str = typer.Argument(..., help="Keywords to search for"),
    config_path: Path = typer.Option(Path("config.yml"), "--config", "-c", help="Config file"),
):
    """
    直接调用图片搜索接口，打印第一条结果

    用于排查搜索接口是否可用，不会向群里发送消息。
    """
    import httpx

    from vvbot.search.zvv import ZvvSearchClient

    config = _load_config_or_exit(config_path)
    setup_logging(config.log_level)

    keyword = keyword.strip()
    if not keyword:
        console.print("[red]Error: keyword is empty[/red]")
        raise typer.Exit(1)

    async def run_once():
        async with httpx.AsyncClient(timeout=config.http_timeout) as client:
            return await ZvvSearchClient(client, api_base=config.search_api_base).search(keyword)

    result = asyncio.run(run_once())
    if result.found:
        console.print(f"[green]✓[/green] {result.url}")
    else:
        console.print(f"[yellow]No result:[/yellow] {result.reason}")
        raise typer.Exit(1)
