from __future__ import annotations

import asyncio

import pytest

from client.core import NetworkClient
from client.main import main as client_main
from server.core import SocketServer
from server.main import main as server_main
from shared.core import run_session
from shared.protocol import ExitCode, FrameCodec, TransportError

from conftest import ScriptedConsole


async def _chat(bob: ScriptedConsole, alice: ScriptedConsole, codec: FrameCodec):
    server = SocketServer("127.0.0.1", 0, "Bob")
    await server.start()

    async def responder():
        connection = await server.wait_for_peer()
        return await run_session(connection, codec, bob)

    async def initiator():
        connection = await NetworkClient("127.0.0.1", server.bound_port, "Alice").connect()
        return await run_session(connection, codec, alice)

    return await asyncio.wait_for(asyncio.gather(responder(), initiator()), timeout=5)


def test_alice_and_bob_exchange_messages():
    bob = ScriptedConsole(["hi"])
    alice = ScriptedConsole(["hello"])

    bob_outcome, alice_outcome = asyncio.run(_chat(bob, alice, FrameCodec("little")))

    assert bob.shown == [("Alice", "hello")]
    assert alice.shown == [("Bob", "hi")]
    assert "peer sent display name, Alice" in bob.output
    assert "peer sent display name, Bob" in alice.output
    # Alice ran out of input and closed; Bob's next read saw the disconnect.
    assert alice_outcome.local_close
    assert bob_outcome.step == "receive message"
    assert "Alice disconnected." in bob.output
    assert bob_outcome.exit_code is ExitCode.SUCCESS
    assert alice_outcome.exit_code is ExitCode.SUCCESS


def test_responder_closing_ends_initiator_gracefully():
    bob = ScriptedConsole([])
    alice = ScriptedConsole(["hello", "anyone?"])

    bob_outcome, alice_outcome = asyncio.run(_chat(bob, alice, FrameCodec("big")))

    assert bob.shown == [("Alice", "hello")]
    assert bob_outcome.local_close
    assert alice_outcome.outcome.value == "disconnected"
    assert alice_outcome.step == "receive message"
    assert alice_outcome.exit_code is ExitCode.SUCCESS


def test_server_stops_listening_after_first_peer():
    async def scenario():
        server = SocketServer("127.0.0.1", 0, "Bob")
        await server.start()
        first = await NetworkClient("127.0.0.1", server.bound_port, "Alice").connect()
        accepted = await asyncio.wait_for(server.wait_for_peer(), 5)
        try:
            with pytest.raises(TransportError):
                await NetworkClient("127.0.0.1", server.bound_port, "Eve").connect()
        finally:
            await first.close()
            await accepted.close()

    asyncio.run(scenario())


def test_connect_failure_is_transport_error():
    async def scenario():
        server = SocketServer("127.0.0.1", 0, "Bob")
        await server.start()
        port = server.bound_port
        await server.stop()
        await NetworkClient("127.0.0.1", port, "Alice").connect()

    with pytest.raises(TransportError):
        asyncio.run(scenario())


def test_server_main_rejects_bad_port(capsys):
    assert server_main(["70000", "Bob"]) == ExitCode.FAILURE
    assert "valid range" in capsys.readouterr().err


def test_client_main_rejects_non_numeric_port(capsys):
    assert client_main(["localhost", "99ab", "Alice"]) == ExitCode.FAILURE
    assert "non-numeric" in capsys.readouterr().err
