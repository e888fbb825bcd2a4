#!/usr/bin/env python3
"""
Advance Bot 主入口文件

命令行用法:
    advance-bot name
    advance-bot [--config PATH] [--debug] <white|black> <input_path> <output_path>
"""

import sys
from typing import Optional, Sequence, Tuple, Union

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from advance_project import __version__
from advance_project.src.advance_engine.config import ConfigManager
from advance_project.src.advance_engine.inference_interface import GameInterface
from advance_project.src.advance_engine.rules_engine import Side
from advance_project.src.advance_engine.utils import (
    AdvanceError, BoardIOError, MalformedBoardError, UsageError, setup_from_config
)

console = Console()
error_console = Console(stderr=True)

USAGE = (
    "用法: advance-bot name [input_path output_path]\n"
    "      advance-bot [--config PATH] [--debug] <white|black> <input_path> <output_path>"
)

NAME_COMMAND = 'name'


def parse_arguments(args: Sequence[str]) -> Union[Tuple[str], Tuple[Side, str, str]]:
    """
    解析位置参数

    Args:
        args: 命令行位置参数

    Returns:
        ('name',) 或 (side, input_path, output_path)

    Raises:
        UsageError: 参数个数或阵营取值不合法
    """
    # 'name' 带不带文件参数都只输出名称
    if args and args[0] == NAME_COMMAND and len(args) in (1, 3):
        return (NAME_COMMAND,)

    if len(args) != 3:
        raise UsageError(f"需要1个或3个参数，实际为{len(args)}个")

    side, input_path, output_path = args
    if side not in (Side.WHITE.value, Side.BLACK.value):
        raise UsageError(f"无效的阵营: {side}")

    return (Side.from_string(side), input_path, output_path)


def print_board(board, title: str):
    """打印棋盘"""
    console.print(Panel(escape(board.to_visual_string()), title=title, border_style="blue"))


@click.command(context_settings={'ignore_unknown_options': True})
@click.version_option(version=__version__, prog_name="Advance Bot")
@click.option('--debug', is_flag=True, help='启用调试模式')
@click.option('--config', type=click.Path(exists=True, dir_okay=False), help='配置文件路径')
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
def cli(debug: bool, config: Optional[str], args: Tuple[str, ...]):
    """Advance对弈机器人 - 读取棋盘文件，为指定阵营走一步并写回"""
    # 参数不合法时不读取配置，也不创建日志文件
    try:
        command = parse_arguments(args)
    except UsageError as e:
        error_console.print(f"[red]{escape(str(e))}[/red]", highlight=False, soft_wrap=True)
        error_console.print(USAGE, markup=False, highlight=False, soft_wrap=True)
        sys.exit(1)

    config_manager = ConfigManager(config)
    engine_config = config_manager.get_engine_config()
    board_config = config_manager.get_board_config()

    setup_from_config(engine_config, debug=debug)

    if debug:
        error_console.print("[yellow]调试模式已启用[/yellow]")

    if command[0] == NAME_COMMAND:
        console.print(engine_config.bot_name, markup=False, highlight=False, soft_wrap=True)
        return

    side, input_path, output_path = command
    interface = GameInterface(engine_config=engine_config, board_config=board_config)

    try:
        record = interface.play_turn(side, input_path, output_path)
    except (BoardIOError, MalformedBoardError) as e:
        error_console.print(f"[red]{escape(str(e))}[/red]", highlight=False, soft_wrap=True)
        sys.exit(1)

    if engine_config.show_board:
        print_board(record.board, title=f"{side.value}: {record.result}")


def main():
    """主入口函数"""
    try:
        cli()
    except KeyboardInterrupt:
        error_console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)
    except AdvanceError as e:
        error_console.print(f"[red]发生错误: {escape(str(e))}[/red]", highlight=False, soft_wrap=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
