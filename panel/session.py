import logging

from panel.http import ApiError
from panel.records import RecordError, User

logger = logging.getLogger(__name__)


class AuthSession:
    """Logged-in state for the panel: the user record and the client's token."""

    def __init__(self, client, notifier):
        self.client = client
        self.notifier = notifier
        self.user = None

    @property
    def is_logged_in(self):
        return self.user is not None and self.client.token is not None

    def login(self, email, password):
        try:
            body = self.client.post('/login', json={'email': email, 'password': password})
            user = User.parse(body['user'])
            token = body['token']
        except ApiError as e:
            self.notifier.error(e.message)
            return False
        except (KeyError, TypeError, RecordError) as e:
            logger.error('Unexpected login response: %s', e)
            self.notifier.error('Unexpected response from server')
            return False

        self.client.set_token(token)
        self.user = user
        self.notifier.success(f'Welcome, {user.name}')
        return True

    def logout(self):
        self.client.set_token(None)
        self.user = None
