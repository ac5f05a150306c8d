from __future__ import annotations

import argparse
import functools
import logging
import pathlib
import typing

import timeflake
import trio

from .device.keystreams import make_keystream
from .device.recorded_keyboard import Replayer
from .editor.engine import HintEngine
from .hints import WordListHints
from .settings import load_settings

if typing.TYPE_CHECKING:
    from .editor.candidates import InputPanel
    from .editor.types import SessionId
    from .settings import Settings

logger = logging.getLogger(__name__)


class ConsoleFrontend:
    def __init__(self, *, preedit: bool = True):
        self.preedit = preedit
        self.committed: list[str] = []

    def commit_string(self, session_id: SessionId, text: str):
        self.committed.append(text)
        print(f"commit: {text!r}")

    def update_panel(self, session_id: SessionId, panel: InputPanel):
        labelled = [f"{label}:{text}" for label, text in zip(panel.candidates.labels(), panel.candidates.texts)]
        print(f"preedit: {panel.client_preedit.text!r} candidates: {' '.join(labelled)}")

    def reset_panel(self, session_id: SessionId):
        logger.debug("panel reset for %s", session_id)

    def supports_preedit(self, session_id: SessionId) -> bool:
        return self.preedit


class LoggingNotifier:
    def notify(self, category: str, title: str, message: str):
        logger.info("[%s] %s: %s", category, title, message)


def make_hints(settings: Settings) -> typing.Optional[WordListHints]:
    if settings.dictionary_path is None:
        logger.warning("No dictionary_path configured; word hints are unavailable")
        return None
    return WordListHints.from_directory(settings.dictionary_path)


async def replay(recording: pathlib.Path, settings: Settings, *, realtime: bool, hint: bool):
    frontend = ConsoleFrontend()
    engine = HintEngine(settings=settings, frontend=frontend, hints=make_hints(settings), notifier=LoggingNotifier())
    session_id = timeflake.random()
    if hint:
        engine.state_for(session_id).enable_word_hint = True

    replayer = Replayer.from_path(recording, realtime=realtime)
    async with trio.open_nursery() as nursery:
        send_channel, receive_channel = trio.open_memory_channel(0)

        async def feed():
            async with send_channel:
                async for event in replayer.keystream():
                    await send_channel.send(event)

        nursery.start_soon(feed)
        async with make_keystream(receive_channel, settings, engine, session_id) as keystream:
            async for dispatched in keystream:
                if not dispatched.outcome.consumed and not dispatched.event.is_release and dispatched.event.character:
                    print(f"forward: {dispatched.event.character!r}")
    engine.commit_buffer(session_id)
    return frontend.committed


parser = argparse.ArgumentParser(description="Replay a recorded keystream through the word hint engine.")
parser.add_argument("recording", type=pathlib.Path)
parser.add_argument("--settings", type=pathlib.Path, default=None)
parser.add_argument("--realtime", action="store_true", help="honour the recorded delays between events")
parser.add_argument("--hint", action="store_true", help="start with word hints enabled")
parser.add_argument("--debug", action="store_true")


def main():
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    settings = load_settings(args.settings)
    trio.run(functools.partial(replay, args.recording, settings, realtime=args.realtime, hint=args.hint))


if __name__ == "__main__":
    main()
