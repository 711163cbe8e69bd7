"""
eBay OAuth 令牌缓存

只持有一个 client-credentials 令牌, 过期或缺失时才重新申请。
不做并发单飞: 过期瞬间的并发请求可能各自刷新一次。
"""
import time

import requests
from loguru import logger

from marketplace.errors import MarketplaceAuthError

SANDBOX_AUTH_URL = 'https://api.sandbox.ebay.com/identity/v1/oauth2/token'
PRODUCTION_AUTH_URL = 'https://api.ebay.com/identity/v1/oauth2/token'

OAUTH_SCOPE = 'https://api.ebay.com/oauth/api_scope'


class TokenCache:
    """OAuth 令牌缓存"""

    # 提前 60 秒视为过期
    SAFETY_MARGIN = 60

    def __init__(self, app_id, cert_id, auth_url=SANDBOX_AUTH_URL,
                 session=None, clock=time.time, timeout=10):
        self.app_id = app_id
        self.cert_id = cert_id
        self.auth_url = auth_url
        self.session = session or requests.Session()
        self.clock = clock
        self.timeout = timeout

        self._token = None
        self._expires_at = 0.0

    @property
    def is_valid(self) -> bool:
        return self._token is not None and self._expires_at > self.clock()

    def invalidate(self):
        """丢弃缓存的令牌"""
        self._token = None
        self._expires_at = 0.0

    def get_token(self) -> str:
        """
        获取可用的 bearer 令牌

        Returns:
            access token 字符串

        Raises:
            MarketplaceAuthError: 凭据缺失/无效, 或认证端点不可达
        """
        if self.is_valid:
            return self._token

        if not self.app_id or not self.cert_id:
            raise MarketplaceAuthError('eBay credentials are not configured')

        try:
            response = self.session.post(
                self.auth_url,
                auth=(self.app_id, self.cert_id),
                headers={'Content-Type': 'application/x-www-form-urlencoded'},
                data={'grant_type': 'client_credentials', 'scope': OAUTH_SCOPE},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
            token = data.get('access_token')
            expires_in = float(data.get('expires_in') or 0)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error getting eBay access token: {e}")
            raise MarketplaceAuthError('Failed to authenticate with eBay API') from e
        except (AttributeError, TypeError) as e:
            logger.error(f"Unexpected eBay token response: {e}")
            raise MarketplaceAuthError('Failed to authenticate with eBay API') from e

        if not token:
            logger.error("eBay token response has no access_token")
            raise MarketplaceAuthError('Failed to authenticate with eBay API')

        self._token = token
        self._expires_at = self.clock() + expires_in - self.SAFETY_MARGIN
        logger.debug(f"Obtained eBay token, valid for {expires_in:.0f}s")

        return self._token
