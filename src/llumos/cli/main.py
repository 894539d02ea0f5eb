"""llumos CLI: command-line interface for Llumos.

Commands:
    tiers             Show the tier catalog
    quota             Evaluate prompt usage for a tier
    gate              Check Local AI Authority eligibility for a tier
    validate-domain   Validate a website domain
    gen-key           Generate a CMS encryption key
    encrypt           Encrypt a CMS password
    decrypt           Decrypt a stored CMS password
    serve             Run the edge functions locally
"""

from __future__ import annotations

import json
import os
import sys

import click
import yaml

from llumos import __version__
from llumos.cms.crypto import CmsCipher, CmsError, generate_encryption_key, is_encrypted
from llumos.config import LlumosConfig, load_config, resolve_encryption_key
from llumos.gating.plan_gating import (
    get_ineligible_tier_message,
    get_local_authority_limits,
    is_local_authority_eligible,
)
from llumos.tiers.pricing import get_plan_price
from llumos.tiers.quotas import TIER_QUOTAS, resolve_tier
from llumos.tiers.usage import quota_usage_for_tier
from llumos.validation.domain import validate_domain


def _resolve_cfg() -> LlumosConfig:
    """Load config from llumos.yaml (auto-discover, never error)."""
    try:
        return load_config()
    except (OSError, ValueError, yaml.YAMLError):
        return LlumosConfig()


def _cipher(key: str | None) -> CmsCipher:
    key_hex = resolve_encryption_key(key, _resolve_cfg())
    if not key_hex:
        raise click.UsageError(
            "No encryption key. Pass --key, set LLUMOS_CMS_ENCRYPTION_KEY "
            "or add cms_encryption_key to llumos.yaml."
        )
    try:
        return CmsCipher.from_hex(key_hex)
    except CmsError as e:
        click.echo(click.style("ERROR", fg="red") + f"  {e}", err=True)
        sys.exit(1)


def _flag(value: bool) -> str:
    return click.style("yes", fg="green") if value else click.style("no", fg="red")


# --- Root group ---


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Llumos: plan tiers, quotas and feature gating."""


# --- tiers command ---


@cli.command("tiers")
@click.option("--json-output", is_flag=True, help="Output as JSON")
def tiers(json_output: bool) -> None:
    """Show quotas, prices and Local AI Authority access per tier."""
    if json_output:
        data = {}
        for tier, quotas in TIER_QUOTAS.items():
            price = get_plan_price(tier)
            data[tier.value] = {
                "quotas": quotas.model_dump(mode="json", exclude_none=True),
                "price": price.model_dump() if price else None,
                "local_authority": get_local_authority_limits(tier).model_dump(mode="json"),
            }
        click.echo(json.dumps(data, indent=2))
        return

    header = (
        f"{'TIER':<9} {'PER DAY':>7} {'PROVIDERS':>9} {'USERS':>5} "
        f"{'BRANDS':>6} {'MAX':>4} {'RUNS':<7} {'PRICE/MO':>8}  LOCAL AUTHORITY"
    )
    click.echo(click.style(header, bold=True))
    for tier, q in TIER_QUOTAS.items():
        price = get_plan_price(tier)
        price_text = f"${price.monthly}" if price else "-"
        max_text = str(q.max_prompts) if q.max_prompts is not None else "-"
        click.echo(
            f"{tier.value:<9} {q.prompts_per_day:>7} {q.providers_per_prompt:>9} "
            f"{q.max_users:>5} {q.max_brands:>6} {max_text:>4} "
            f"{q.run_frequency.value:<7} {price_text:>8}  "
            f"{_flag(is_local_authority_eligible(tier))}"
        )


# --- quota command ---


@cli.command("quota")
@click.argument("tier")
@click.argument("used", type=click.IntRange(min=0))
@click.option("--json-output", is_flag=True, help="Output as JSON")
def quota(tier: str, used: int, json_output: bool) -> None:
    """Evaluate USED prompts against TIER's ceiling."""
    usage = quota_usage_for_tier(tier, used)

    if json_output:
        click.echo(json.dumps(
            usage.model_dump(mode="json") if usage else None, indent=2,
        ))
        return

    resolved = resolve_tier(tier)
    if usage is None:
        click.echo(f"{resolved.value}: no usage bar (daily-rate plan)")
        return

    click.echo(
        f"{resolved.value}: {usage.prompts_used} of {usage.max_prompts} prompts used, "
        f"{usage.remaining} remaining ({usage.usage_percent:.0f}%)"
    )
    if usage.is_at_limit:
        click.echo(click.style("At limit", fg="red", bold=True))
    elif usage.is_near_limit:
        click.echo(click.style("Near limit", fg="yellow"))


# --- gate command ---


@cli.command("gate")
@click.argument("tier")
def gate(tier: str) -> None:
    """Show Local AI Authority eligibility and limits for TIER."""
    if not is_local_authority_eligible(tier):
        click.echo(click.style("NOT ELIGIBLE", fg="red", bold=True))
        click.echo(f"  {get_ineligible_tier_message(tier)}")
        return

    limits = get_local_authority_limits(tier)
    click.echo(click.style("ELIGIBLE", fg="green", bold=True))
    click.echo(f"  Profiles:            {limits.max_profiles}")
    click.echo(f"  Runs per day:        {limits.max_runs_per_day}")
    click.echo(f"  Prompts per profile: {limits.max_prompts_per_profile}")
    click.echo(f"  Models:              {', '.join(limits.models_allowed)}")


# --- validate-domain command ---


@cli.command("validate-domain")
@click.argument("value")
def validate_domain_cmd(value: str) -> None:
    """Validate a website domain as entered in a form."""
    result = validate_domain(value)
    if result.is_valid:
        status = click.style("VALID", fg="green")
    else:
        status = click.style("INVALID", fg="red")
    click.echo(f"{status}  {result.cleaned_domain}")
    if result.warning:
        click.echo(f"  {result.warning}")
    if not result.is_valid:
        sys.exit(1)


# --- key and cipher commands ---


@cli.command("gen-key")
def gen_key() -> None:
    """Print a new 256-bit CMS encryption key (64 hex characters)."""
    click.echo(generate_encryption_key())


@cli.command("encrypt")
@click.argument("value")
@click.option("--key", default=None, help="Hex encryption key")
def encrypt(value: str, key: str | None) -> None:
    """Encrypt a CMS password."""
    click.echo(_cipher(key).encrypt(value))


@cli.command("decrypt")
@click.argument("value")
@click.option("--key", default=None, help="Hex encryption key")
def decrypt(value: str, key: str | None) -> None:
    """Decrypt a stored CMS password (plaintext values pass through)."""
    if not is_encrypted(value):
        click.echo(value)
        return
    try:
        click.echo(_cipher(key).decrypt(value))
    except CmsError as e:
        click.echo(click.style("ERROR", fg="red") + f"  {e}", err=True)
        sys.exit(1)


# --- serve command ---


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8430, type=int, help="Port number")
@click.option("--dev", is_flag=True, help="Enable interactive API docs")
def serve(host: str, port: int, dev: bool) -> None:
    """Run the edge functions locally.

    Settings come from LLUMOS_EDGE_* environment variables, falling back
    to llumos.yaml.
    """
    try:
        import uvicorn
    except ImportError:
        click.echo(
            "Serving requires extra dependencies. Install with:\n"
            "  pip install llumos[edge]",
            err=True,
        )
        sys.exit(1)

    from edge.app import create_app
    from edge.config import ENV_PREFIX, EdgeConfig

    cfg = _resolve_cfg()
    env = EdgeConfig.from_env()
    if f"{ENV_PREFIX}LOG_LEVEL" in os.environ:
        log_level = env.log_level.upper()
    else:
        log_level = cfg.log_level
    config = EdgeConfig(
        supabase_url=env.supabase_url or cfg.supabase_url or "",
        supabase_service_role_key=(
            env.supabase_service_role_key or cfg.supabase_service_role_key or ""
        ),
        supabase_jwt_secret=env.supabase_jwt_secret or cfg.supabase_jwt_secret or "",
        cms_encryption_key=(
            resolve_encryption_key(env.cms_encryption_key or None, cfg) or ""
        ),
        internal_secret=env.internal_secret or cfg.internal_secret or "",
        log_level=log_level,
        dev_mode=dev or env.dev_mode,
    )
    if not config.supabase_url or not config.supabase_service_role_key:
        click.echo(
            "Error: supabase_url and supabase_service_role_key are required",
            err=True,
        )
        sys.exit(1)

    app = create_app(config)

    click.echo(f"Llumos edge functions: http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")
