"""CLI interface for tweet-segments.

Commands:
    render  - Split a post's text into plain/entity segments and print them
    source  - Show the client a post was made with
    avatar  - Print the author's profile image URL at a given size
    decode  - HTML-decode a string the way post text is decoded
    setup   - Write default options to the config file
"""

import sys
from pathlib import Path

import click

from .config import (
    CONFIG_FILE,
    OUTPUT_FORMATS,
    AppConfig,
    load_config_or_default,
    save_config,
)
from .logging_config import setup_logging
from .models import ExtendedTweetInfo, Status


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", type=click.Path(), default=None, help="Config file path")
@click.pass_context
def main(ctx, verbose, config):
    """Tweet Segments: render post text as plain and entity segments."""
    setup_logging(debug=verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else CONFIG_FILE


def _load_app_config(ctx) -> AppConfig:
    try:
        return load_config_or_default(ctx.obj["config_path"])
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _load_statuses(location: str, timeout: float) -> list[Status]:
    from .loader import load_document
    from .parser import parse_document, parse_statuses

    try:
        raw = load_document(location, timeout=timeout)
        if isinstance(raw, list):
            return parse_statuses(raw)
        status = parse_document(raw)
    except (RuntimeError, ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    return [status] if status else []


def _render_extended(info: ExtendedTweetInfo, output_format: str, link_base: str) -> str:
    from .converter import segments_to_csv, segments_to_json
    from .markdown import render_extended_markdown, render_segments_text

    if output_format == "markdown":
        return render_extended_markdown(info, link_base)
    if output_format == "csv":
        return segments_to_csv(info.tweet_text)
    if output_format == "json":
        return (
            segments_to_json(info.tweet_text, info.hidden_prefix, info.hidden_suffix)
            + "\n"
        )

    lines: list[str] = []
    if info.hidden_prefix:
        lines.append(
            "Replying to " + " ".join(f"@{m.screen_name}" for m in info.hidden_prefix)
        )
    lines.append(render_segments_text(info.tweet_text))
    for u in info.hidden_suffix:
        lines.append(f"Attachment: {u.expanded_url or u.url}")
    return "\n".join(lines) + "\n"


@main.command()
@click.argument("location")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format (default from config)",
)
@click.option(
    "--extended/--no-extended",
    default=None,
    help="Honour the display range, hiding reply mentions and attachments",
)
@click.option("--start", type=int, default=None, help="Window start (code points)")
@click.option("--end", type=int, default=None, help="Window end (code points)")
@click.pass_context
def render(ctx, location, output_format, extended, start, end):
    """Segment the text of the post(s) in LOCATION.

    LOCATION is a JSON file, '-' for stdin, or an http(s) URL. It may hold a
    single status, a GraphQL tweet result, or a list of either.
    """
    from .segmenter import (
        enumerate_text_segments,
        get_extended_tweet_elements,
        status_text_segments,
    )

    config = _load_app_config(ctx)
    output_format = output_format or config.output_format
    extended = config.extended if extended is None else extended

    statuses = _load_statuses(location, config.http_timeout)
    if not statuses:
        click.echo("Error: No posts found in input.", err=True)
        sys.exit(1)

    outputs: list[str] = []
    for status in statuses:
        try:
            if start is not None or end is not None:
                text = status.full_text if status.full_text is not None else status.text
                segments = enumerate_text_segments(text, status.entities, start, end)
                info = ExtendedTweetInfo(tweet_text=tuple(segments))
            elif extended:
                info = get_extended_tweet_elements(status)
            else:
                info = ExtendedTweetInfo(tweet_text=tuple(status_text_segments(status)))
            outputs.append(_render_extended(info, output_format, config.link_base))
        except ValueError as e:
            click.echo(f"Error: post {status.id}: {e}", err=True)
            sys.exit(1)

    click.echo("\n".join(outputs), nl=False)


@main.command()
@click.argument("location")
@click.pass_context
def source(ctx, location):
    """Show the client each post in LOCATION was made with."""
    from .source import parse_status_source

    config = _load_app_config(ctx)
    for status in _load_statuses(location, config.http_timeout):
        parsed = parse_status_source(status)
        if parsed.href:
            click.echo(f"{status.id}\t{parsed.name}\t{parsed.href}")
        else:
            click.echo(f"{status.id}\t{parsed.name}")


@main.command()
@click.argument("location")
@click.option("--size", default=None, help="mini, normal, bigger, 400x400 or orig")
@click.option("--https/--http", "use_https", default=True, help="URL scheme to use")
@click.pass_context
def avatar(ctx, location, size, use_https):
    """Print the profile image URL of each post author in LOCATION."""
    from .profile_image import profile_image_url, profile_image_url_https

    config = _load_app_config(ctx)
    size = size if size is not None else config.profile_image_size

    statuses = _load_statuses(location, config.http_timeout)
    missing = 0
    for status in statuses:
        if status.user is None:
            missing += 1
            continue
        if use_https:
            click.echo(profile_image_url_https(status.user, size))
        else:
            click.echo(profile_image_url(status.user, size))

    if missing:
        click.echo(f"Error: {missing} post(s) carry no user object.", err=True)
        sys.exit(1)


@main.command()
@click.argument("text")
def decode(text):
    """HTML-decode TEXT (numeric references and lt, gt, amp, quot, apos, nbsp)."""
    from .htmldecode import html_decode

    try:
        click.echo(html_decode(text))
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.pass_context
def setup(ctx):
    """Write default rendering options to the config file."""
    config_path = ctx.obj["config_path"]
    current = _load_app_config(ctx)

    click.echo("Tweet Segments Setup")
    click.echo("=" * 40)
    click.echo()

    output_format = click.prompt(
        "Default output format",
        type=click.Choice(OUTPUT_FORMATS),
        default=current.output_format,
    )
    extended = click.confirm(
        "Hide reply mentions and attachment links (extended mode)?",
        default=current.extended,
    )
    link_base = click.prompt("Link base for hashtags and mentions", default=current.link_base)
    size = click.prompt("Default profile image size", default=current.profile_image_size)
    timeout = click.prompt("HTTP timeout (seconds)", type=float, default=current.http_timeout)

    config = AppConfig(
        output_format=output_format,
        extended=extended,
        link_base=link_base.rstrip("/"),
        profile_image_size=size,
        http_timeout=timeout,
    )
    save_config(config, config_path)
    click.echo(f"\nConfig saved to {config_path}")
