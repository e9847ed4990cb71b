from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from ..log import get_logger
from .events import OutboundReply

logger = get_logger("slack_client")

class SlackClientWrapper:
    def __init__(self, client: WebClient):
        self.client = client

    @classmethod
    def from_token(cls, token: str) -> "SlackClientWrapper":
        return cls(WebClient(token=token, logger=get_logger("api")))

    def post_message(self, reply: OutboundReply):
        """
        Posts a top-level message as plain text.
        Raises SlackApiError (or another SlackClientError) when Slack rejects the call.
        """
        try:
            return self.client.chat_postMessage(
                channel=reply.channel,
                text=reply.text,
            )
        except SlackApiError as e:
            logger.error(f"Slack API error: {e.response['error']}")
            raise
