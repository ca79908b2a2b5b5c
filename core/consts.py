"""Global constants."""


class OAuth2Param:
    """OAuth2 request parameter names."""

    TOKEN = "token"
    ACCESS_TOKEN = "access_token"


class OAuth2TokenType:
    """OAuth2 token types."""

    BEARER = "Bearer"


class OidcScope:
    """OpenID Connect scopes."""

    OPENID = "openid"


class AuthenticationAttribute:
    """Attribute names recorded on an authentication at token issuance."""

    AUTHENTICATION_METHOD = "authenticationMethod"
    GRANT_TYPE = "grant_type"


class ClientAuthMethod:
    """OAuth2 client authentication methods."""

    CLIENT_SECRET_BASIC = "client_secret_basic"


CLIENT_AUTH_METHODS: tuple[str, ...] = (ClientAuthMethod.CLIENT_SECRET_BASIC,)

INTROSPECTION_PATH = "/introspect"
REALM_NAME_SEPARATOR = ","
