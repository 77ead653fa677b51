from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from client.core import NetworkClient
from shared.core import run_session
from shared.protocol import ChatError, ExitCode, FrameCodec, InitiatorParams
from shared.settings import SETTINGS, load_settings
from shared.ui import ChatConsole


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chat-client",
        description="Connect to a waiting peer and chat with it in alternating turns.",
    )
    parser.add_argument("host", help="host name or address of the listening peer")
    parser.add_argument("port", help="port of the listening peer, within (1000, 65535]")
    parser.add_argument("display_name", help="name shown to the peer")
    return parser


async def run_client(params: InitiatorParams, console: ChatConsole) -> ExitCode:
    codec = FrameCodec(SETTINGS.byte_order)
    connection = await NetworkClient(params.host, params.port, params.display_name).connect()
    console.connected(connection.peername)
    outcome = await run_session(connection, codec, console)
    return outcome.exit_code


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = ChatConsole()
    try:
        load_settings()
        logging.basicConfig(level=SETTINGS.log_level)
        console.prompt_text = SETTINGS.prompt
        params = InitiatorParams.parse(host=args.host, port=args.port, display_name=args.display_name)
        return int(asyncio.run(run_client(params, console)))
    except ChatError as exc:
        console.error(exc.message)
        return int(exc.exit_code)
    except KeyboardInterrupt:
        return int(ExitCode.INTERRUPTED)


if __name__ == "__main__":
    sys.exit(main())
