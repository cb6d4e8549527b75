"""Running the external dialog program.

The program draws on the caller's terminal (stdin/stdout/stderr are
inherited) and reports its result on a separate pipe, whose descriptor is
named with ``--output-fd``. That pipe is drained in a worker thread while
the program runs.
"""

from __future__ import annotations

import asyncio
import logging
import os
import subprocess
from collections.abc import Callable, Sequence
from contextlib import suppress
from typing import BinaryIO

from .config import DEFAULT_SETTINGS, DialogSettings
from .errors import DialogProducerError, DialogRunError

logger = logging.getLogger(__name__)

Producer = Callable[[BinaryIO], None]


def _drain(fd: int) -> bytes:
    with os.fdopen(fd, "rb") as reader:
        return reader.read()


def _program_env(dialogrc: str | None) -> dict[str, str] | None:
    if not dialogrc:
        return None
    return {**os.environ, "DIALOGRC": dialogrc}


async def run_dialog(
    args: Sequence[str],
    *,
    settings: DialogSettings = DEFAULT_SETTINGS,
    dialogrc: str | None = None,
    stdin: int | None = None,
) -> str:
    """Run the dialog program and return what it wrote to the result channel.

    Args:
        args: Arguments after the output descriptor flag
        settings: Supplies the program name and the flag
        dialogrc: Optional rc file, exported as ``DIALOGRC``
        stdin: Descriptor to use as the program's stdin (default: inherit)

    Raises:
        DialogRunError: The program could not be started or exited non-zero
    """
    read_fd, write_fd = os.pipe()
    drain = asyncio.create_task(asyncio.to_thread(_drain, read_fd))
    cmd = [settings.program, settings.output_fd_flag, str(write_fd), *args]
    logger.debug(f"Running dialog: {cmd!r}")

    try:
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=stdin,
                pass_fds=(write_fd,),
                env=_program_env(dialogrc),
            )
        except (OSError, ValueError) as e:
            raise DialogRunError(f"failed to start {settings.program}: {e}") from e
        returncode = await proc.wait()
    finally:
        # Closing our copy is what lets the drain see EOF once the child is gone
        os.close(write_fd)
        output = (await drain).decode("utf-8", errors="replace")

    logger.debug(f"Dialog exited with {returncode}, {len(output)} chars of output")
    if returncode != 0:
        raise DialogRunError(
            f"{settings.program} exited with status {returncode}",
            returncode=returncode,
            output=output,
        )
    return output


def _produce(producer: Producer, sink: BinaryIO) -> None:
    try:
        producer(sink)
    finally:
        if not sink.closed:
            with suppress(BrokenPipeError):
                sink.close()


def _log_orphaned_producer(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning(f"Program box producer failed after the dialog exited: {exc}")


async def run_dialog_streaming(
    args: Sequence[str],
    producer: Producer,
    *,
    settings: DialogSettings = DEFAULT_SETTINGS,
    dialogrc: str | None = None,
) -> str:
    """Run the dialog program with its stdin fed by ``producer``.

    The producer runs in a worker thread, writing into the sink it is
    given, and should close the sink when done. A failure of the program
    takes precedence over a failure of the producer.

    Raises:
        DialogRunError: The program could not be started or exited non-zero
        DialogProducerError: The program succeeded but the producer raised
    """
    read_fd, write_fd = os.pipe()
    sink = os.fdopen(write_fd, "wb")
    produced = asyncio.create_task(asyncio.to_thread(_produce, producer, sink))

    try:
        output = await run_dialog(args, settings=settings, dialogrc=dialogrc, stdin=read_fd)
    except BaseException:
        produced.add_done_callback(_log_orphaned_producer)
        raise
    finally:
        # Without a reader left, a producer still writing gets EPIPE and stops
        os.close(read_fd)

    try:
        await produced
    except Exception as e:
        raise DialogProducerError(f"program box producer failed: {e}") from e
    return output


def command_producer(argv: Sequence[str]) -> Producer:
    """Build a producer that streams a command's stdout and stderr.

    Raises ``subprocess.CalledProcessError`` from the worker thread when the
    command exits non-zero, which surfaces as a DialogProducerError.
    """

    def produce(sink: BinaryIO) -> None:
        with sink:
            subprocess.run(list(argv), stdout=sink, stderr=subprocess.STDOUT, check=True)

    return produce
