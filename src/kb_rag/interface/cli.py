from __future__ import annotations

# ruff: noqa: E402, B008

"""Thin CLI that delegates to the query use case.

Commands:
- ask: answer a question against one or more knowledge bases, optionally streamed
"""

import asyncio
import logging
import sys

import typer

from kb_rag.application.use_cases import KnowledgeBaseQueryUseCase
from kb_rag.config.configure_app import get_query_use_case
from kb_rag.exceptions import KnowledgeBaseQueryError
from kb_rag.logging_setup import setup_logging

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Knowledge base Q&A")


def _force_utf8_stdio() -> None:
    # Answers are Chinese text; narrow console encodings (cp1252) would fail on print
    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if callable(reconfigure):
            reconfigure(encoding="utf-8", errors="replace")


def _build_query_use_case() -> KnowledgeBaseQueryUseCase:
    return get_query_use_case()


async def _stream_answer(uc: KnowledgeBaseQueryUseCase, kb_ids: list[int], question: str) -> None:
    async for chunk in uc.answer_stream(kb_ids, question):
        typer.echo(chunk, nl=False)
    typer.echo()


@app.callback()
def main_callback() -> None:
    """Knowledge base Q&A."""


@app.command("ask")
def ask_cmd(
    question: str = typer.Argument(..., help="问题 / question text"),
    kb: list[int] = typer.Option(..., "--kb", help="Knowledge base id (repeatable)"),
    stream: bool = typer.Option(False, "--stream/--no-stream", help="Stream the answer"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    uc = _build_query_use_case()
    if stream:
        asyncio.run(_stream_answer(uc, kb, question))
        return
    try:
        resp = uc.query(kb, question)
    except KnowledgeBaseQueryError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e
    typer.secho(f"[{resp.knowledge_base_names}]", fg=typer.colors.CYAN)
    typer.echo(resp.answer)


def main() -> int:
    _force_utf8_stdio()
    try:
        app()
        return 0
    except Exception as e:  # noqa: BLE001
        typer.secho(f"Error: {e}", fg=typer.colors.RED)
        return 1


if __name__ == "__main__":
    sys.exit(main())
