from __future__ import annotations

import asyncio
import csv
import dataclasses
import io
from typing import List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit

import typer

from .breach import BreachChecker, BreachResult, BreachState
from .config import get_settings
from .entropy import estimate_credential
from .errors import PolicyError
from .generator import GeneratedCredential, generate_bulk
from .logging import configure_logging, get_logger
from .policy import (
    PRESETS,
    GenerationPolicy,
    Mode,
    apply_preset,
    compliance_issues,
    policy_from_query,
    policy_to_query,
)
from .strength import analyse, score, zxcvbn_bits

logger = get_logger(__name__)

# Set up Typer command-line interface
app = typer.Typer(add_help_option=True, help="Generate random passwords and passphrases from the terminal.")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr")):
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, json_output=settings.log_json)


# Serialise credentials as index,password rows with the password always quoted
def to_csv(values: List[str]) -> str:
    out = io.StringIO()
    out.write("index,password\n")
    writer = csv.writer(out, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for idx, value in enumerate(values, 1):
        writer.writerow([idx, value])
    return out.getvalue()


def _breach_line(result: BreachResult) -> str:
    if result.state is BreachState.COMPROMISED:
        return f"Breach: compromised ({result.count:,} times)"
    return f"Breach: {result.state.value}"


async def _check_all(values: List[str]) -> List[BreachResult]:
    async with BreachChecker() as checker:
        return [await checker.check(v) for v in values]


def _details(credential: GeneratedCredential) -> List[str]:
    est = estimate_credential(credential)
    strength = score(credential.policy, credential.value)
    zx = zxcvbn_bits(analyse(credential.value))
    return [
        f"Strength: {strength.label.value} ({strength.score}/6)",
        f"Entropy: ~{est.rounded_bits} bits (zxcvbn: {zx:.1f} bits)",
        f"Crack time: online {est.online}, offline {est.offline}",
    ]


# CLI command to generate new credentials with configuration
@app.command("new", help="Print one or more passwords to stdout.")
def new(
    mode: Mode = typer.Option(Mode.RANDOM, "--mode", "-m", help="random characters or readable words"),
    length: int = typer.Option(16, "--length", "-l", min=4, max=128, help="Password length (random mode)"),
    lowercase: bool = typer.Option(True, "--lower/--no-lower", help="Include lowercase letters"),
    uppercase: bool = typer.Option(True, "--upper/--no-upper", help="Include uppercase letters"),
    digits: bool = typer.Option(True, "--digits/--no-digits", help="Include digits"),
    symbols: bool = typer.Option(True, "--symbols/--no-symbols", help="Include symbols"),
    exclude_similar: bool = typer.Option(False, "--exclude-similar", help="Drop look-alike characters (il1Lo0O)"),
    coverage: bool = typer.Option(True, "--coverage/--no-coverage", help="At least one character of each class"),
    words: int = typer.Option(4, "--words", min=2, max=8, help="Number of words (readable mode)"),
    word_list: str = typer.Option(None, "--word-list", help="common, animals, nature or freq:<lang>"),
    separator: str = typer.Option("-", "--separator", help="One of - _ . ' ' none"),
    capitalize: bool = typer.Option(True, "--capitalize/--no-capitalize", help="Capitalise each word"),
    number: bool = typer.Option(True, "--number/--no-number", help="Append a number from 1 to 999"),
    preset: str = typer.Option("custom", "--preset", help="Apply a preset on top of the options"),
    link: str = typer.Option(None, "--from-link", help="Take options from a share link"),
    count: int = typer.Option(1, "--count", min=1, help="How many to generate"),
    as_csv: bool = typer.Option(False, "--csv", help="Print index,password CSV"),
    details: bool = typer.Option(False, "--details", "-d", help="Show strength and crack-time estimates"),
    breach_check: Optional[bool] = typer.Option(None, "--breach-check/--no-breach-check", help="Look values up in the breach corpus"),
    share: bool = typer.Option(False, "--share", help="Print a share link for these options and exit"),
):
    settings = get_settings()
    try:
        policy = GenerationPolicy(
            mode=mode,
            length=length,
            lowercase=lowercase,
            uppercase=uppercase,
            digits=digits,
            symbols=symbols,
            exclude_similar=exclude_similar,
            require_coverage=coverage,
            word_list=word_list or settings.default_word_list,
            word_count=words,
            separator=separator,
            capitalize_words=capitalize,
            append_number=number,
        )
        if link:
            policy = policy_from_query(dict(parse_qsl(urlsplit(link).query or link)), policy)
        policy = apply_preset(policy, preset)
    except PolicyError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)

    if share:
        typer.echo("?" + urlencode(policy_to_query(policy)))
        return

    for issue in compliance_issues(policy):
        typer.secho(f"Warning: {issue}", fg=typer.colors.YELLOW, err=True)

    try:
        creds = generate_bulk(policy, count)
    except PolicyError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)

    logger.info("credentials_generated", count=len(creds), mode=policy.mode.value)

    values = [c.value for c in creds]
    if as_csv:
        typer.echo(to_csv(values), nl=False)
        return

    do_breach = settings.breach_enabled if breach_check is None else breach_check
    results = asyncio.run(_check_all(values)) if do_breach else []

    # Print each generated value, with estimates if asked
    for idx, cred in enumerate(creds):
        typer.echo(cred.value)
        if details:
            for line in _details(cred):
                typer.echo(f"  {line}")
        if results:
            colour = typer.colors.RED if results[idx].state is BreachState.COMPROMISED else None
            typer.secho(f"  {_breach_line(results[idx])}", fg=colour)


@app.command("check", help="Look a password up in the breach corpus without sending it.")
def check(
    value: str = typer.Option(..., "--value", prompt=True, hide_input=True, help="Password to look up"),
):
    result = asyncio.run(_check_all([value]))[0]
    colour = {
        BreachState.COMPROMISED: typer.colors.RED,
        BreachState.SAFE: typer.colors.GREEN,
    }.get(result.state)
    typer.secho(_breach_line(result), fg=colour)
    if result.state is BreachState.COMPROMISED:
        raise typer.Exit(1)
    if result.state is BreachState.ERROR:
        raise typer.Exit(3)


@app.command("presets", help="List presets and what they change.")
def presets():
    base = GenerationPolicy()
    for key in PRESETS:
        policy = apply_preset(base, key)
        changed = []
        for field in dataclasses.fields(policy):
            value = getattr(policy, field.name)
            if value != getattr(base, field.name):
                shown = value.value if isinstance(value, Mode) else repr(value)
                changed.append(f"{field.name}={shown}")
        typer.echo(f"{key}: {', '.join(changed) or 'no changes'}")
