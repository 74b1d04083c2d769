"""
Uploaded design references.

The picture a client attaches on step 1 is kept in the cache only while the
wizard points at it. Callers pair every `create` with a `release` when the
picture is replaced, removed or the wizard is reset.
"""
import logging
import secrets
from dataclasses import dataclass

from django.conf import settings
from django.core.cache import caches
from django.urls import reverse

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = 'design_preview_'


@dataclass(frozen=True)
class DesignPreview:
    token: str
    name: str
    content_type: str

    @property
    def url(self):
        return reverse('bookings:design_preview', args=[self.token])

    def to_dict(self):
        return {'token': self.token, 'name': self.name, 'content_type': self.content_type}

    @classmethod
    def from_dict(cls, data):
        if not data:
            return None
        return cls(token=data['token'], name=data['name'], content_type=data['content_type'])


class DesignPreviewStore:
    """Create/release pairs for design previews held in a Django cache."""

    def __init__(self, cache_alias='previews', timeout=None):
        self.cache_alias = cache_alias
        self._timeout = timeout

    @property
    def cache(self):
        return caches[self.cache_alias]

    @property
    def timeout(self):
        # Previews never outlive the session that owns them
        if self._timeout is not None:
            return self._timeout
        return settings.SESSION_COOKIE_AGE

    def _key(self, token):
        return f'{CACHE_KEY_PREFIX}{token}'

    def create(self, uploaded_file):
        token = secrets.token_urlsafe(16)
        content_type = getattr(uploaded_file, 'content_type', None) or 'application/octet-stream'
        uploaded_file.seek(0)
        self.cache.set(
            self._key(token),
            {'content': uploaded_file.read(), 'content_type': content_type},
            self.timeout,
        )
        preview = DesignPreview(token=token, name=uploaded_file.name, content_type=content_type)
        logger.debug(f"Design preview created: {preview.name} ({token})")
        return preview

    def release(self, preview):
        if preview is None:
            return
        self.cache.delete(self._key(preview.token))
        logger.debug(f"Design preview released: {preview.name} ({preview.token})")

    def open(self, token):
        """Return (content, content_type) for a live preview, or None."""
        entry = self.cache.get(self._key(token))
        if entry is None:
            return None
        return entry['content'], entry['content_type']


previews = DesignPreviewStore()
