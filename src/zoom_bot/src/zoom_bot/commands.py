"""Chat command replies.

Maps a normalized command (case-folded, trimmed) to a reply producer. Commands
have English and Chinese aliases; anything unrecognized is echoed back with a
short menu, so every input produces a reply.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

BOT_VERSION = "1.0.0"
DEFAULT_USER_NAME = "用户"
LOCAL_TIMEZONE = ZoneInfo("Asia/Shanghai")

_STARTED_AT = time.monotonic()

SHORT_MENU = "• help - 查看帮助\n• time - 查看时间\n• ping - 测试连接"

HELP_TEXT = (
    "🤖 **Zoom聊天机器人帮助**\n\n"
    "**可用命令：**\n"
    "• hello/hi/你好 - 问候机器人\n"
    "• help/帮助 - 显示此帮助信息\n"
    "• time/时间 - 查看当前时间\n"
    "• ping - 测试机器人连接状态\n"
    "• info/信息 - 查看机器人版本信息\n\n"
    "**使用说明：**\n"
    "直接发送命令即可，机器人会自动回复！"
)


@dataclass(frozen=True)
class CommandContext:
    """Inputs available to a reply producer."""

    raw: str
    user_name: str
    now: datetime
    uptime_seconds: float


ReplyProducer = Callable[[CommandContext], str]


def process_uptime() -> float:
    """Seconds since the command module was loaded."""
    return time.monotonic() - _STARTED_AT


# ---------------------------------------------------------------------------
# Reply producers
# ---------------------------------------------------------------------------


def _greeting(ctx: CommandContext) -> str:
    return (
        f"你好 {ctx.user_name}！我是Zoom聊天机器人 🤖\n\n"
        "试试发送以下命令：\n"
        f"{SHORT_MENU}\n"
        "• info - 查看机器人信息"
    )


def _help(_ctx: CommandContext) -> str:
    return HELP_TEXT


def _time(ctx: CommandContext) -> str:
    local = ctx.now.astimezone(LOCAL_TIMEZONE)
    return f"🕐 **当前时间**\n{local.year}/{local.month}/{local.day} {local:%H:%M:%S}"


def _ping(ctx: CommandContext) -> str:
    stamp = ctx.now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"🏓 **Pong!**\n\n系统状态：✅ 运行正常\n响应时间：< 100ms\n服务器时间：{stamp}"


def _info(ctx: CommandContext) -> str:
    return (
        "🤖 **机器人信息**\n\n"
        f"**版本：** {BOT_VERSION}\n"
        "**状态：** 🟢 在线\n"
        "**功能：** 智能聊天、命令处理\n"
        "**支持：** 中文/英文\n"
        f"**运行时间：** {int(ctx.uptime_seconds)} 秒"
    )


def _fallback(ctx: CommandContext) -> str:
    return f'我收到了你的消息："{ctx.raw}"\n\n🤖 我是智能聊天机器人，试试发送：\n{SHORT_MENU}'


COMMANDS: dict[str, ReplyProducer] = {
    "hello": _greeting,
    "hi": _greeting,
    "你好": _greeting,
    "help": _help,
    "帮助": _help,
    "time": _time,
    "时间": _time,
    "ping": _ping,
    "info": _info,
    "信息": _info,
}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def normalize(cmd: str) -> str:
    """Case-fold and trim a command for lookup."""
    return cmd.strip().casefold()


def process_command(
    cmd: str,
    user_name: str,
    *,
    now: datetime | None = None,
    uptime_seconds: float | None = None,
) -> str:
    """Return the reply text for a chat command.

    Args:
        cmd: Raw command text as typed by the user.
        user_name: Display name used in greetings.
        now: Instant used by time-dependent replies; defaults to the current time.
        uptime_seconds: Uptime reported by ``info``; defaults to the process uptime.

    Returns:
        Reply text. Unrecognized commands echo ``cmd`` verbatim with a short menu.

    """
    ctx = CommandContext(
        raw=cmd,
        user_name=user_name,
        now=now if now is not None else datetime.now(UTC),
        uptime_seconds=uptime_seconds if uptime_seconds is not None else process_uptime(),
    )
    producer = COMMANDS.get(normalize(cmd), _fallback)
    return producer(ctx)
