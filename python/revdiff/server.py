import json
import logging
import sys
from pathlib import Path

import structlog
from mcp.server.fastmcp import FastMCP

from revdiff.aligner import align
from revdiff.config import SERVER_NAME, ensure_within_limit
from revdiff.diff import diff_texts as _diff_texts
from revdiff.ingest import read_document as _read_document
from revdiff.markup import render_critic_markup
from revdiff.tokenizer import tokenize

# --- LOGGING CONFIGURATION ---
# MCP communicates over stdio.
# CRITICAL: All logs must go to stderr. Any print to stdout will break the JSON-RPC protocol.
logging.basicConfig(stream=sys.stderr, level=logging.INFO, force=True)

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
)

logger = structlog.get_logger(__name__)

mcp = FastMCP(SERVER_NAME)


def _render(original: str, revised: str, output: str) -> str:
    ensure_within_limit(original, label="original")
    ensure_within_limit(revised, label="revised")

    if output == "markup":
        return render_critic_markup(align(tokenize(original), tokenize(revised)))
    if output == "json":
        return json.dumps(_diff_texts(original, revised).model_dump(mode="json"))
    raise ValueError(f"Unknown output format: {output!r} (expected 'json' or 'markup')")


@mcp.tool()
def diff_texts(original: str, revised: str, output: str = "json") -> str:
    """
    Aligns a revised text against its original at word level.

    Args:
        original: The text as the user wrote it.
        revised: The corrected or paraphrased text.
        output: "json" (default) returns both segment lists with roles
                (UNCHANGED, REMOVED, ADDED, REPLACED) and stable keys.
                "markup" returns one CriticMarkup string:
                {--deleted--}{++inserted++}.
    """
    try:
        return _render(original or "", revised or "", output)
    except Exception as e:
        logger.warning("diff_texts failed", error=str(e))
        return f"Error computing diff: {str(e)}"


@mcp.tool()
def diff_files(original_path: str, revised_path: str, output: str = "markup") -> str:
    """
    Compares two files (DOCX or plain text) word by word.

    Args:
        original_path: Absolute path to the original document.
        revised_path: Absolute path to the revised document.
        output: "markup" (default) or "json", as for diff_texts.
    """
    try:
        original = _read_document(Path(original_path))
        revised = _read_document(Path(revised_path))
        return _render(original, revised, output)
    except FileNotFoundError as e:
        return f"Error: {str(e)}"
    except Exception as e:
        return f"Error computing diff: {str(e)}"


@mcp.tool()
def read_document(file_path: str) -> str:
    """
    Reads a DOCX (or plain text) file and returns its text content.

    Args:
        file_path: Absolute path to the file.
    """
    try:
        return _read_document(Path(file_path))
    except Exception as e:
        return f"Error reading file: {str(e)}"


def main():
    mcp.run()


if __name__ == "__main__":
    main()
