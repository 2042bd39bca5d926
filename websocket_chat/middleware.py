import logging
from urllib.parse import parse_qs

import jwt
from channels.middleware import BaseMiddleware

from homeswift.jwt_utils import user_type_from_claims, validate_jwt_token

logger = logging.getLogger(__name__)


class WebSocketAuthMiddleware(BaseMiddleware):
    """
    Authenticate WebSocket handshakes with the ``token`` query parameter.

    Valid tokens put ``user_id`` and ``user_type`` on the scope; anything
    else closes the handshake with code 4001.
    """

    async def __call__(self, scope, receive, send):
        query_params = parse_qs(scope.get('query_string', b'').decode())
        token = query_params.get('token', [None])[0]

        if not token:
            await self.reject(send, 'Authentication token required')
            return

        payload = self.validate_token(token)
        if not payload or not payload.get('sub'):
            await self.reject(send, 'Invalid authentication token')
            return

        scope = dict(scope)
        scope['user_id'] = str(payload['sub'])
        scope['user_type'] = user_type_from_claims(payload)
        scope['authenticated'] = True

        return await super().__call__(scope, receive, send)

    def validate_token(self, token):
        try:
            return validate_jwt_token(token)
        except jwt.InvalidTokenError as e:
            logger.warning("WebSocket JWT validation failed: %s", e)
            return None

    async def reject(self, send, reason):
        await send({
            'type': 'websocket.close',
            'code': 4001,
            'reason': reason,
        })
