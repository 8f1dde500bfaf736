"""Localized message lookup for chat-style notifications."""

from typing import Callable, Mapping, Optional

from src.core.config import get_settings

settings = get_settings()

# (message_id, locale) -> text
Localizer = Callable[[str, str], str]

DEFAULT_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "notification.type.new.issue": "New issue",
        "notification.type.issue.state.changed": "Issue state changed",
        "notification.type.new.pullrequest": "New pull request",
        "issue.assignee": "Assignee",
        "issue.state": "Status",
        "pullRequest.sender": "Contributor",
        "pullRequest.from": "From",
        "pullRequest.to": "To",
    },
    "ko": {
        "notification.type.new.issue": "새 이슈",
        "notification.type.issue.state.changed": "이슈 상태 변경",
        "notification.type.new.pullrequest": "새 코드 보내기 요청",
        "issue.assignee": "담당자",
        "issue.state": "상태",
        "pullRequest.sender": "보낸 사람",
        "pullRequest.from": "보낼 브랜치",
        "pullRequest.to": "받을 브랜치",
    },
}


class MessageCatalog:
    """In-memory message catalog keyed by locale.

    Lookups fall back to the default locale, then to the message id itself,
    so a missing key shows up in the rendered text instead of failing.
    """

    def __init__(
        self,
        messages: Optional[Mapping[str, Mapping[str, str]]] = None,
        default_locale: Optional[str] = None,
    ) -> None:
        self.messages = messages if messages is not None else DEFAULT_MESSAGES
        self.default_locale = default_locale or settings.default_locale

    def __call__(self, message_id: str, locale: str) -> str:
        for candidate in (locale, self.default_locale):
            catalog = self.messages.get(candidate, {})
            if message_id in catalog:
                return catalog[message_id]
        return message_id
