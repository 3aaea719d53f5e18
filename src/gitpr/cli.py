"""Command-line entry point: ``git-pr`` (or ``git pr`` once it is on PATH)."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import click

from gitpr.core.config import Settings, get_settings
from gitpr.core.constants import DEFAULT_REVIEW_MESSAGE, REMOTE_NAME, SHORT_SHA_LENGTH
from gitpr.core.exceptions import GitPrError
from gitpr.core.logging import setup_logging, structlog_trace_sink
from gitpr.core.models import ReviewDecision
from gitpr.git.branches import BranchManager
from gitpr.git.runner import GitRunner
from gitpr.github.client import GitHubClient
from gitpr.github.remote import resolve_origin
from gitpr.render.diff import DiffRenderer
from gitpr.render.listing import collect_commits, collect_listing, render_details, render_list
from gitpr.review.submitter import ReviewSubmitter, StepName


@dataclass
class AppContext:
    """Per-invocation wiring: settings plus the local git runner."""

    settings: Settings
    git: GitRunner

    def github(self) -> GitHubClient:
        """Resolve ``origin`` and build an authenticated client for it."""
        repo = resolve_origin(self.git)
        trace = structlog_trace_sink() if self.settings.debug else None
        return GitHubClient(self.settings, repo, trace=trace)


def _error(message: str) -> None:
    click.secho(f"❌ {message}", fg="red", err=True)


@contextmanager
def _fail_on(prefix: str) -> Iterator[None]:
    """Report any git-pr error with ``prefix`` and exit 1."""
    try:
        yield
    except GitPrError as e:
        _error(f"{prefix}: {e}")
        if e.detail and e.detail != str(e):
            click.echo(f"   {e.detail}", err=True)
        sys.exit(1)


pr_number_argument = click.argument("pr_number", type=click.IntRange(min=1), metavar="PR_NUMBER")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="git-pr", prog_name="git-pr")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """A Git plugin to interact with GitHub pull requests.

    \b
    Examples:
        git pr list
        git pr pull 42
        git pr show-diff 42 --raw | less
        git pr submit-review 42 -m "Not good" --reject
    """
    if ctx.obj is None:
        with _fail_on("Configuration error"):
            ctx.obj = AppContext(settings=get_settings(), git=GitRunner())
    setup_logging(ctx.obj.settings.effective_log_level)


@cli.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all currently open pull requests for the repository."""
    with _fail_on("Error listing PRs"), app.github() as client:
        listing = collect_listing(client)

    for number, error in listing.failures.items():
        click.secho(f"⚠️  Failed to fetch details for PR #{number}: {error}", fg="yellow", err=True)
    click.echo(render_list(listing.pull_requests))


@cli.command("show-details")
@pr_number_argument
@click.pass_obj
def show_details(app: AppContext, pr_number: int) -> None:
    """Show a PR with one row per commit and the files it changed."""
    with _fail_on("Error showing PR details"), app.github() as client:
        pr = client.get_pull_request(pr_number)
        details = collect_commits(client, pr_number)

    for sha, error in details.failures.items():
        click.secho(f"⚠️  Failed to fetch commit {sha}: {error}", fg="yellow", err=True)
    click.echo(render_details(pr, details.commits))


@cli.command()
@pr_number_argument
@click.pass_obj
def pull(app: AppContext, pr_number: int) -> None:
    """Fetch a PR into a local branch and check it out."""
    click.secho(f"📥 Pulling PR #{pr_number}...", fg="green")

    with _fail_on("Failed to pull PR"), app.github() as client:
        result = BranchManager(client, app.git).pull(pr_number)

    branch = result.branch
    if branch.upstream_ref:
        click.echo(
            f"✅ Switched to branch {click.style(branch.name, fg='green')} "
            f"tracking {REMOTE_NAME}/{branch.upstream_ref}"
        )
    else:
        click.echo(f"✅ Switched to branch {click.style(branch.name, fg='green')}")

    if not branch.pushable:
        click.echo(f"This branch is a read-only checkout of PR #{pr_number}, since it comes from a fork.")
        click.echo(f"Push follow-up work to a new branch in {client.repo.full_name} instead.")

    if not result.matches_head:
        click.secho(
            f"⚠️  Local tip {result.local_sha[:SHORT_SHA_LENGTH]} differs from the PR head "
            f"{result.pull_request.head_sha[:SHORT_SHA_LENGTH]} reported by GitHub.",
            fg="yellow",
            err=True,
        )


@cli.command("show-diff")
@pr_number_argument
@click.option("--raw", is_flag=True, help="Print GitHub's unified diff unmodified, for piping.")
@click.pass_obj
def show_diff(app: AppContext, pr_number: int, raw: bool) -> None:
    """Show the diff of a PR against its base branch."""
    if not raw:
        click.secho(f"🔍 Showing diff for PR #{pr_number}...", fg="green")

    with _fail_on("Error showing diff"), app.github() as client:
        DiffRenderer(client, pager=app.settings.pager).show_diff(pr_number, raw=raw)


_DECISION_BANNERS: dict[ReviewDecision, str] = {
    ReviewDecision.APPROVE: "📝 Submitting APPROVAL review for PR #{number}...",
    ReviewDecision.COMMENT_ONLY: "📝 Submitting COMMENT only review for PR #{number}...",
    ReviewDecision.REQUEST_CHANGES: "📝 Submitting REQUEST_CHANGES review and closing PR #{number}...",
}


def _choose_decision(settings: Settings, approve: bool, comment_only: bool, reject: bool) -> tuple[ReviewDecision, bool]:
    """Return the decision and whether it came from the configured default."""
    chosen = [
        decision
        for decision, flag in (
            (ReviewDecision.APPROVE, approve),
            (ReviewDecision.COMMENT_ONLY, comment_only),
            (ReviewDecision.REQUEST_CHANGES, reject),
        )
        if flag
    ]
    if len(chosen) > 1:
        raise click.UsageError("--approve, --comment-only and --reject are mutually exclusive.")
    if chosen:
        return chosen[0], False

    default = settings.default_decision
    if default is None:
        raise click.UsageError(
            "No review decision given: pass --approve, --comment-only or --reject "
            "(GIT_PR_DEFAULT_REVIEW is set to 'explicit')."
        )
    return default, True


@cli.command("submit-review")
@pr_number_argument
@click.option("-m", "--message", default=DEFAULT_REVIEW_MESSAGE, show_default=True, help="Review body.")
@click.option("--approve", is_flag=True, help="Approve the PR.")
@click.option("--comment-only", is_flag=True, help="Comment without approving.")
@click.option("--reject", is_flag=True, help="Request changes and close the PR.")
@click.pass_obj
def submit_review(
    app: AppContext,
    pr_number: int,
    message: str,
    approve: bool,
    comment_only: bool,
    reject: bool,
) -> None:
    """Submit a review: approve, comment only, or reject and close."""
    decision, defaulted = _choose_decision(app.settings, approve, comment_only, reject)

    if defaulted:
        click.echo(f"📝 No review flag specified, defaulting to {decision.event} for PR #{pr_number}...")
    else:
        click.echo(_DECISION_BANNERS[decision].format(number=pr_number))

    with _fail_on("Error submitting review"), app.github() as client:
        report = ReviewSubmitter(client).submit(pr_number, decision, message)

    review = report.outcome(StepName.SUBMIT_REVIEW)
    if review is not None and review.ok:
        click.echo(f"✅ Review submitted successfully for PR #{pr_number}")
    elif review is not None:
        _error(f"Error submitting review: {review.error}")

    close = report.outcome(StepName.CLOSE_PULL_REQUEST)
    if close is not None and close.ok:
        click.echo(f"✅ PR #{pr_number} successfully closed.")
    elif close is not None:
        _error(f"Failed to close PR: {close.error}")

    if not report.ok:
        sys.exit(1)


@cli.command("help")
@click.argument("command", required=False)
@click.pass_context
def help_cmd(ctx: click.Context, command: str | None) -> None:
    """Show help for git-pr or one of its commands."""
    parent = ctx.parent
    if parent is None or command is None:
        click.echo((parent or ctx).get_help())
        return

    target = cli.get_command(parent, command)
    if target is None:
        raise click.UsageError(f"No such command '{command}'.", ctx=parent)
    with click.Context(target, info_name=command, parent=parent) as sub:
        click.echo(target.get_help(sub))


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
