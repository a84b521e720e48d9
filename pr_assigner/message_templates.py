"""Message templates for reviewer assignment notifications."""

from typing import Iterable

from .models import PullRequest

SUPPORTED_LANGUAGES = ('english', 'german')


def get_message_templates(language: str) -> dict:
    """Get message templates for the specified language."""
    if language == 'german':
        return {
            'assigned': "Hey {mentions}, ich brauche eure Hilfe fuer ein *Code Review* fuer: {pr}",
            'replaced': "Review-Anfrage entfernt fuer: {removed}. Neu angefragt: {mentions}, bitte das *Code Review* fuer {pr} uebernehmen.",
            'no_candidates': ":warning: Fuer {pr} konnte kein Reviewer gefunden werden ({needed} benoetigt).",
            'pr_with_url': "*{title}* ({url})",
            'pr_without_url': "*{title}*",
            'pr_fallback_title': "PR #{number}",
            'conjunction': "und",
        }
    else:  # english (default)
        return {
            'assigned': "Hey {mentions}, you have been requested for a *code review* on: {pr}",
            'replaced': "Review request removed for: {removed}. Newly requested: {mentions}, please take over the *code review* on: {pr}",
            'no_candidates': ":warning: No eligible reviewers could be found for {pr} ({needed} needed).",
            'pr_with_url': "*{title}* ({url})",
            'pr_without_url': "*{title}*",
            'pr_fallback_title': "PR #{number}",
            'conjunction': "and",
        }


def join_mentions(mentions: Iterable[str], conjunction: str) -> str:
    """Join mention tokens as ``a``, ``a and b`` or ``a, b and c``."""
    mentions = list(mentions)
    if len(mentions) <= 1:
        return ''.join(mentions)
    return f"{', '.join(mentions[:-1])} {conjunction} {mentions[-1]}"


def format_pr(pr: PullRequest, templates: dict) -> str:
    """Render the PR reference used inside a message."""
    # Slack renders backticks as code spans
    title = pr.title.replace('`', '') if pr.title else templates['pr_fallback_title'].format(number=pr.number)
    if pr.url:
        return templates['pr_with_url'].format(title=title, url=pr.url)
    return templates['pr_without_url'].format(title=title)
