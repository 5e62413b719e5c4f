import logging

import requests
from atproto import Client, client_utils, models

from headlinebot.errors import AuthenticationError, PublishError
from headlinebot.text import truncate

logger = logging.getLogger(__name__)

MAX_THUMB_BYTES = 1_000_000
MAX_DESCRIPTION_LENGTH = 1000
DEFAULT_DESCRIPTION = "Positive news story"


class BlueskyPublisher:
    """Posts a single candidate to Bluesky.

    Authentication and posting failures are fatal; a broken thumbnail only
    downgrades the post to plain text with the link appended.
    """

    def __init__(self, handle, password, client_factory=Client, session=None,
                 headers=None, timeout=15, max_text_length=300):
        self.handle = handle
        self.password = password
        self.client_factory = client_factory
        self.session = session or requests.Session()
        self.headers = headers or {}
        self.timeout = timeout
        self.max_text_length = max_text_length

    def login(self):
        if not self.handle or not self.password:
            raise AuthenticationError("BLUESKY_HANDLE or BLUESKY_APP_PASSWORD not set")
        client = self.client_factory()
        try:
            client.login(self.handle, self.password)
        except Exception as e:
            raise AuthenticationError(f"Bluesky login failed for {self.handle}: {e}") from e
        logger.info(f"Logged in to Bluesky as {self.handle}")
        return client

    def fetch_image(self, url):
        response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        response.raise_for_status()
        mime_type = (response.headers.get('Content-Type') or '').split(';')[0].strip().lower()
        if not mime_type.startswith('image/'):
            raise ValueError(f"not an image ({mime_type or 'no content type'})")
        data = response.content
        if not data:
            raise ValueError("empty image")
        if len(data) > MAX_THUMB_BYTES:
            raise ValueError(f"image too large ({len(data)} bytes)")
        return data, mime_type

    def upload_thumbnail(self, client, image_url):
        if not image_url:
            return None
        try:
            data, mime_type = self.fetch_image(image_url)
            blob = client.upload_blob(data).blob
            logger.info(f"Uploaded thumbnail ({mime_type}, {len(data)} bytes)")
            return blob
        except Exception as e:
            logger.warning(f"Posting without thumbnail, {image_url} failed: {e}")
            return None

    def build_link_card(self, headline, thumb):
        description = truncate(headline.description or DEFAULT_DESCRIPTION, MAX_DESCRIPTION_LENGTH)
        return models.AppBskyEmbedExternal.Main(
            external=models.AppBskyEmbedExternal.External(
                uri=headline.link,
                title=truncate(headline.title, self.max_text_length),
                description=description,
                thumb=thumb,
            )
        )

    def build_text_with_link(self, title, link):
        # the facet keeps the full URL; only the visible text is shortened
        display = link
        if len(link) > self.max_text_length // 2:
            display = truncate(link, self.max_text_length // 2)
        room = max(self.max_text_length - len(display) - 2, 1)
        text = client_utils.TextBuilder()
        text.text(f"{truncate(title, room)}\n\n")
        text.link(display, link)
        return text

    def publish(self, candidate):
        headline = candidate.headline
        client = self.login()
        thumb = self.upload_thumbnail(client, headline.image_url)
        try:
            if thumb is not None:
                text = truncate(headline.title, self.max_text_length)
                response = client.send_post(text=text, embed=self.build_link_card(headline, thumb))
            else:
                response = client.send_post(text=self.build_text_with_link(headline.title, headline.link))
        except Exception as e:
            raise PublishError(f"Error posting to Bluesky: {e}") from e
        uri = getattr(response, 'uri', None)
        logger.info(f"Posted to Bluesky: {headline.title} ({uri})")
        return uri


def build_publisher(config, session=None):
    return BlueskyPublisher(
        config.bluesky_handle,
        config.bluesky_app_password,
        session=session,
        headers=config.request_headers,
        timeout=config.http_timeout,
        max_text_length=config.max_text_length,
    )
