from __future__ import annotations

# ruff: noqa: E402, B008

"""Local tooling around the chat engine.

Commands:
- ask: run one chat turn through the Lambda handler and print the envelope
- extract: build the document snapshot from the site content JSON
- precompute: aggregate every document under the data prefix into the snapshot
"""

import json
import sys
from pathlib import Path

import typer

from portfolio_chat.api.handler import handle_event
from portfolio_chat.config.composition import build_chat_use_case, build_object_store
from portfolio_chat.core.settings import Settings, get_settings
from portfolio_chat.logging_setup import setup_logging

app = typer.Typer(add_completion=False)

DEFAULT_SNAPSHOT_OUT = Path("rag-data") / "portfolio-documents.json"


def _settings(data_dir: Path | None = None) -> Settings:
    s = get_settings()
    if data_dir is not None:
        s = s.model_copy(update={"local_data_dir": data_dir})
    return s


@app.callback()
def _main(
    log_level: str | None = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
) -> None:
    setup_logging(log_level or get_settings().log_level)


@app.command("ask")
def ask_cmd(
    message: str = typer.Argument(..., help="Visitor message"),
    name: str | None = typer.Option(None, "--name", help="Visitor name remembered by the widget"),
    data_dir: Path | None = typer.Option(
        None, "--data-dir", help="Read documents from this directory instead of S3"
    ),
) -> None:
    settings = _settings(data_dir)
    use_case = build_chat_use_case(settings)
    body: dict[str, str] = {"message": message}
    if name:
        body["name"] = name
    event = {"httpMethod": "POST", "path": "/chat", "body": json.dumps(body)}
    resp = handle_event(event, use_case_factory=lambda: use_case, settings=settings)
    typer.echo(f"Status: {resp['statusCode']}")
    payload = json.loads(resp["body"]) if resp["body"] else {}
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
    if resp["statusCode"] >= 400:
        raise typer.Exit(code=1)


@app.command("extract")
def extract_cmd(
    site_config: Path = typer.Argument(..., help="Site content JSON (sections, projects, skills...)"),
    out: Path = typer.Option(DEFAULT_SNAPSHOT_OUT, "--out", help="Snapshot output path"),
    scrape_url: list[str] | None = typer.Option(None, "--scrape-url", help="Page to scrape (repeatable)"),
) -> None:
    from portfolio_chat.pipeline.extract import build_snapshot, dump_documents, load_site_content

    content = load_site_content(site_config)
    scraped = []
    if scrape_url:
        from portfolio_chat.infra.loaders.web import scrape_pages

        scraped = scrape_pages(scrape_url)
    docs = build_snapshot(content, extra=scraped)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(dump_documents(docs), encoding="utf-8")
    typer.echo(f"Extracted {len(docs)} documents to {out} (+{len(scraped)} scraped URLs)")


@app.command("precompute")
def precompute_cmd(
    upload: bool = typer.Option(True, "--upload/--no-upload", help="Upload to the snapshot key"),
    out: Path | None = typer.Option(DEFAULT_SNAPSHOT_OUT, "--out", help="Also write locally"),
    data_dir: Path | None = typer.Option(None, "--data-dir", help="Local store root instead of S3"),
) -> None:
    from portfolio_chat.pipeline.extract import dump_documents
    from portfolio_chat.pipeline.precompute import precompute_snapshot

    settings = _settings(data_dir)
    store = build_object_store(settings)
    docs = precompute_snapshot(
        store, prefix=settings.data_prefix, snapshot_key=settings.snapshot_key, upload=upload
    )
    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(dump_documents(docs), encoding="utf-8")
        typer.echo(f"Wrote {len(docs)} docs to {out}")
    if upload:
        typer.echo(f"Uploaded {len(docs)} docs to {settings.snapshot_key}")


def main() -> int:
    try:
        app()
        return 0
    except Exception as e:  # noqa: BLE001
        typer.secho(f"Error: {e}", fg=typer.colors.RED)
        return 1


if __name__ == "__main__":
    sys.exit(main())
