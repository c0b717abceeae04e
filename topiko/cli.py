"""Click CLI entry point for Topiko."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from topiko.config import Settings
from topiko.logging import configure_logging
from topiko.models.answers import AnswerSet, Budget, Challenge, DigitalStatus, Goal
from topiko.scoring.rules import load_rule_table
from topiko.scoring.scorer import ReadinessScorer, score_answers


def _scorer(settings: Settings) -> ReadinessScorer:
    return ReadinessScorer(load_rule_table(settings.rules_path))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Topiko lead funnel and digital readiness scoring."""
    ctx.ensure_object(dict)
    settings = Settings()
    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(log_level=log_level, log_format=settings.log_format)
    ctx.obj["settings"] = settings


@cli.command()
@click.option(
    "--goal",
    "goals",
    multiple=True,
    type=click.Choice([g.value for g in Goal]),
    help="Business goal (repeatable)",
)
@click.option("--status", type=click.Choice([s.value for s in DigitalStatus]), default=None)
@click.option("--budget", type=click.Choice([b.value for b in Budget]), default=None)
@click.option("--challenge", type=click.Choice([c.value for c in Challenge]), default=None)
@click.option(
    "--from-json",
    "from_json",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read answers from a JSON file instead of options",
)
@click.option("--json", "as_json", is_flag=True, help="Print the full report as JSON")
@click.pass_context
def score(
    ctx: click.Context,
    goals: tuple[str, ...],
    status: str | None,
    budget: str | None,
    challenge: str | None,
    from_json: Path | None,
    as_json: bool,
) -> None:
    """Score a questionnaire and print the readiness report."""
    scorer = _scorer(ctx.obj["settings"])
    if from_json is not None:
        assessment = score_answers(json.loads(from_json.read_text(encoding="utf-8")), scorer)
    else:
        answers = AnswerSet(goals=goals, digital_status=status, budget=budget, challenge=challenge)
        assessment = scorer.assess(answers)

    if as_json:
        click.echo(assessment.model_dump_json(by_alias=True, indent=2))
        return

    overall = assessment.overall
    product = overall.recommendations.product_suggestion
    click.echo(f"Readiness: {overall.total_score}/100 ({overall.category.label})")
    for name, part in overall.breakdown.items():
        click.echo(f"  {name:<15} {part.score:>3}  x{part.weight:.2f} = {part.weighted_score:.2f}")
    dims = assessment.dimensions
    click.echo(
        f"Dimensions: visibility={dims.visibility} engagement={dims.engagement} "
        f"automation={dims.automation} brand={dims.brand_presentation}"
    )
    match = assessment.three_category_match
    click.echo(
        f"Category match: marketing={match.marketing}% website={match.website}% "
        f"branding={match.branding}%"
    )
    click.echo(
        f"Recommended: {product.product} ({product.pricing}, {product.setup_time}) "
        f"- {assessment.solution_match}% match"
    )
    for insight in assessment.insights:
        click.echo(f"  * {insight.title}")


@cli.command()
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the rule table to a file instead of stdout",
)
@click.pass_context
def rules(ctx: click.Context, output: Path | None) -> None:
    """Print the active scoring rule table as JSON."""
    table = load_rule_table(ctx.obj["settings"].rules_path)
    text = table.model_dump_json(by_alias=True, indent=2)
    if output is None:
        click.echo(text)
    else:
        output.write_text(text + "\n", encoding="utf-8")
        click.echo(f"Rule table written to {output}")


@cli.command("send-otp")
@click.argument("mobile")
@click.option("--otp", "otp_code", default=None, help="OTP to send (generated if omitted)")
@click.pass_context
def send_otp(ctx: click.Context, mobile: str, otp_code: str | None) -> None:
    """Send an OTP to a 10-digit mobile number."""
    from topiko.clients.magictext import MagicTextClient, SmsDeliveryError
    from topiko.otp import OtpRelay

    settings: Settings = ctx.obj["settings"]
    relay = OtpRelay(
        MagicTextClient(
            api_key=settings.sms_api_key,
            sender_id=settings.sms_sender_id,
            base_url=settings.sms_gateway_url,
            timeout=settings.sms_timeout,
        ),
        brand=settings.otp_brand,
        support_phone=settings.otp_support_phone,
        otp_length=settings.otp_length,
    )
    try:
        dispatch = relay.send(mobile, otp_code)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="MOBILE") from exc
    except SmsDeliveryError as exc:
        click.echo(f"Failed to send OTP: {exc}", err=True)
        sys.exit(1)
    click.echo(f"OTP {dispatch.otp} sent to {mobile}")


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Show which external services are configured."""
    settings: Settings = ctx.obj["settings"]
    click.echo(f"MagicText SMS:  {'configured' if settings.sms_configured else 'mock mode'}")
    click.echo(f"Supabase:       {'configured' if settings.analytics_configured else 'offline'}")
    if settings.rules_path is None:
        click.echo("Rule table:     built-in defaults")
        return
    try:
        load_rule_table(settings.rules_path)
    except (OSError, ValueError) as exc:
        click.echo(f"Rule table:     INVALID ({settings.rules_path}): {exc}", err=True)
        sys.exit(1)
    click.echo(f"Rule table:     {settings.rules_path}")


@cli.command()
@click.option("--host", type=str, default=None, help="Bind host")
@click.option("--port", type=int, default=None, help="Bind port")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Start the FastAPI API server."""
    import uvicorn

    settings = ctx.obj["settings"]
    uvicorn.run(
        "topiko.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
    )
