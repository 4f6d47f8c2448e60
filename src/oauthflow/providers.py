"""Prebuilt descriptors for common OAuth2 providers.

Each factory takes the client credentials issued in the provider's developer
panel. The ``*_EXTRA_ARG`` constants are provider specific suffixes for
``request_authorization(..., extra_arg=...)``.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

from enum import Enum

from .models import Capability, Issuer, ProviderDescriptor, QueryParametersPolicy

DISCORD = Issuer("discord")
GITHUB = Issuer("github")
REDDIT = Issuer("reddit")
SPOTIFY = Issuer("spotify")
TWITCH = Issuer("twitch")


# Discord


class DiscordScope(str, Enum):
    """See https://discord.com/developers/docs/topics/oauth2#shared-resources-oauth2-scopes"""

    ACTIVITIES_READ = "activities.read"
    ACTIVITIES_WRITE = "activities.write"
    APPLICATIONS_BUILDS_READ = "applications.builds.read"
    APPLICATIONS_BUILDS_UPLOAD = "applications.builds.upload"
    APPLICATIONS_COMMANDS = "applications.commands"
    APPLICATIONS_COMMANDS_UPDATE = "applications.commands.update"
    APPLICATIONS_ENTITLEMENTS = "applications.entitlements"
    APPLICATIONS_STORE_UPDATE = "applications.store.update"
    BOT = "bot"
    CONNECTIONS = "connections"
    EMAIL = "email"
    GDM_JOIN = "gdm.join"
    GUILDS = "guilds"
    GUILDS_JOIN = "guilds.join"
    IDENTIFY = "identify"
    MESSAGES_READ = "messages.read"
    RELATIONSHIPS_READ = "relationships.read"
    RPC = "rpc"
    RPC_ACTIVITIES_WRITE = "rpc.activities.write"
    RPC_NOTIFICATIONS_READ = "rpc.notifications.read"
    RPC_VOICE_READ = "rpc.voice.read"
    RPC_VOICE_WRITE = "rpc.voice.write"
    WEBHOOK_INCOMING = "webhook.incoming"


# Scopes any Discord app may request without approval, a bot account or a
# flow restriction.
DISCORD_DEFAULT_SCOPES = (
    DiscordScope.APPLICATIONS_BUILDS_READ,
    DiscordScope.APPLICATIONS_COMMANDS,
    DiscordScope.APPLICATIONS_ENTITLEMENTS,
    DiscordScope.APPLICATIONS_STORE_UPDATE,
    DiscordScope.CONNECTIONS,
    DiscordScope.EMAIL,
    DiscordScope.GDM_JOIN,
    DiscordScope.GUILDS,
    DiscordScope.IDENTIFY,
    DiscordScope.MESSAGES_READ,
)
DISCORD_FORCE_VERIFY_EXTRA_ARG = "prompt=consent"


def discord(client_id: str, client_secret: str) -> ProviderDescriptor:
    return ProviderDescriptor(
        client_id=client_id,
        client_secret=client_secret,
        authorization_url="https://discord.com/api/oauth2/authorize",
        token_url="https://discord.com/api/oauth2/token",
        revocation_url="https://discord.com/api/oauth2/token/revoke",
        issuer=DISCORD,
        query_parameters_policy=QueryParametersPolicy.USE_URL_ENCODED_FORM,
        capabilities=frozenset(
            {
                Capability.AUTHORIZATION_CODE,
                Capability.IMPLICIT,
                Capability.CLIENT_CREDENTIALS,
                Capability.REFRESH,
                Capability.REVOKE,
            }
        ),
        scopes=DiscordScope,
        default_scopes=tuple(s.value for s in DISCORD_DEFAULT_SCOPES),
    )


# GitHub


class GithubScope(str, Enum):
    """See https://docs.github.com/en/developers/apps/scopes-for-oauth-apps"""

    REPO = "repo"
    REPO_STATUS = "repo:status"
    REPO_DEPLOYMENT = "repo_deployment"
    PUBLIC_REPO = "public_repo"
    REPO_INVITE = "repo:invite"
    SECURITY_EVENTS = "security_events"
    ADMIN_REPO_HOOK = "admin:repo_hook"
    WRITE_REPO_HOOK = "write:repo_hook"
    READ_REPO_HOOK = "read:repo_hook"
    ADMIN_ORG = "admin:org"
    WRITE_ORG = "write:org"
    READ_ORG = "read:org"
    ADMIN_PUBLIC_KEY = "admin:public_key"
    WRITE_PUBLIC_KEY = "write:public_key"
    READ_PUBLIC_KEY = "read:public_key"
    ADMIN_ORG_HOOK = "admin:org_hook"
    GIST = "gist"
    NOTIFICATIONS = "notifications"
    USER = "user"
    READ_USER = "read:user"
    USER_EMAIL = "user:email"
    USER_FOLLOW = "user:follow"
    DELETE_REPO = "delete_repo"
    WRITE_DISCUSSION = "write:discussion"
    READ_DISCUSSION = "read:discussion"
    WRITE_PACKAGES = "write:packages"
    READ_PACKAGES = "read:packages"
    DELETE_PACKAGES = "delete:packages"
    ADMIN_GPG_KEY = "admin:gpg_key"
    WRITE_GPG_KEY = "write:gpg_key"
    READ_GPG_KEY = "read:gpg_key"
    WORKFLOW = "workflow"


GITHUB_DISALLOW_SIGNUP_EXTRA_ARG = "allow_signup=false"


def github(client_id: str, client_secret: str) -> ProviderDescriptor:
    return ProviderDescriptor(
        client_id=client_id,
        client_secret=client_secret,
        authorization_url="https://github.com/login/oauth/authorize",
        token_url="https://github.com/login/oauth/access_token",
        issuer=GITHUB,
        capabilities=frozenset({Capability.WEB_APP}),
        scopes=GithubScope,
    )


# Reddit


class RedditScope(str, Enum):
    """See https://www.reddit.com/dev/api/oauth"""

    ACCOUNT = "account"
    CREDDITS = "creddits"
    EDIT = "edit"
    FLAIR = "flair"
    HISTORY = "history"
    IDENTITY = "identity"
    LIVE_MANAGE = "livemanage"
    MOD_CONFIG = "modconfig"
    MOD_CONTRIBUTORS = "modcontributors"
    MOD_FLAIR = "modflair"
    MOD_LOG = "modlog"
    MOD_MAIL = "modmail"
    MOD_OTHERS = "modothers"
    MOD_POSTS = "modposts"
    MOD_SELF = "modself"
    MOD_WIKI = "modwiki"
    MY_SUBREDDITS = "mysubreddits"
    PRIVATE_MESSAGES = "privatemessages"
    READ = "read"
    REPORT = "report"
    SAVE = "save"
    STRUCTURED_STYLES = "structuredstyles"
    SUBMIT = "submit"
    SUBSCRIBE = "subscribe"
    VOTE = "vote"
    WIKI_EDIT = "wikiedit"
    WIKI_READ = "wikiread"


# Reddit only issues refresh tokens for permanent grants.
REDDIT_PERMANENT_EXTRA_ARG = "duration=permanent"


def reddit(client_id: str, client_secret: str) -> ProviderDescriptor:
    return ProviderDescriptor(
        client_id=client_id,
        client_secret=client_secret,
        authorization_url="https://www.reddit.com/api/v1/authorize",
        token_url="https://www.reddit.com/api/v1/access_token",
        revocation_url="https://www.reddit.com/api/v1/revoke_token",
        issuer=REDDIT,
        requires_basic_auth=True,
        capabilities=frozenset(
            {
                Capability.AUTHORIZATION_CODE,
                Capability.CLIENT_CREDENTIALS,
                Capability.REFRESH,
                Capability.REVOKE,
            }
        ),
        scopes=RedditScope,
    )


# Spotify


class SpotifyScope(str, Enum):
    """See https://developer.spotify.com/documentation/general/guides/scopes/"""

    UGC_IMAGE_UPLOAD = "ugc-image-upload"
    USER_READ_RECENTLY_PLAYED = "user-read-recently-played"
    USER_TOP_READ = "user-top-read"
    USER_READ_PLAYBACK_POSITION = "user-read-playback-position"
    USER_READ_PLAYBACK_STATE = "user-read-playback-state"
    USER_MODIFY_PLAYBACK_STATE = "user-modify-playback-state"
    USER_READ_CURRENTLY_PLAYING = "user-read-currently-playing"
    APP_REMOTE_CONTROL = "app-remote-control"
    STREAMING = "streaming"
    PLAYLIST_MODIFY_PUBLIC = "playlist-modify-public"
    PLAYLIST_MODIFY_PRIVATE = "playlist-modify-private"
    PLAYLIST_READ_PRIVATE = "playlist-read-private"
    PLAYLIST_READ_COLLABORATIVE = "playlist-read-collaborative"
    USER_FOLLOW_MODIFY = "user-follow-modify"
    USER_FOLLOW_READ = "user-follow-read"
    USER_LIBRARY_MODIFY = "user-library-modify"
    USER_LIBRARY_READ = "user-library-read"
    USER_READ_EMAIL = "user-read-email"
    USER_READ_PRIVATE = "user-read-private"


SPOTIFY_FORCE_VERIFY_EXTRA_ARG = "show_dialog=true"


def spotify(client_id: str, client_secret: str) -> ProviderDescriptor:
    return ProviderDescriptor(
        client_id=client_id,
        client_secret=client_secret,
        authorization_url="https://accounts.spotify.com/authorize",
        token_url="https://accounts.spotify.com/api/token",
        issuer=SPOTIFY,
        capabilities=frozenset(
            {
                Capability.AUTHORIZATION_CODE,
                Capability.IMPLICIT,
                Capability.CLIENT_CREDENTIALS,
                Capability.REFRESH,
            }
        ),
        scopes=SpotifyScope,
    )


# Twitch


class TwitchScope(str, Enum):
    """See https://dev.twitch.tv/docs/authentication#scopes"""

    ANALYTICS_READ_EXTENSIONS = "analytics:read:extensions"
    ANALYTICS_READ_GAMES = "analytics:read:games"
    BITS_READ = "bits:read"
    CHANNEL_EDIT_COMMERCIAL = "channel:edit:commercial"
    CHANNEL_MANAGE_BROADCAST = "channel:manage:broadcast"
    CHANNEL_MANAGE_EXTENSIONS = "channel:manage:extensions"
    CHANNEL_MANAGE_REDEMPTIONS = "channel:manage:redemptions"
    CHANNEL_MANAGE_VIDEOS = "channel:manage:videos"
    CHANNEL_READ_EDITORS = "channel:read:editors"
    CHANNEL_READ_HYPE_TRAIN = "channel:read:hype_train"
    CHANNEL_READ_REDEMPTIONS = "channel:read:redemptions"
    CHANNEL_READ_STREAM_KEY = "channel:read:stream_key"
    CHANNEL_READ_SUBSCRIPTIONS = "channel:read:subscriptions"
    CLIPS_EDIT = "clips:edit"
    MODERATION_READ = "moderation:read"
    USER_EDIT = "user:edit"
    USER_EDIT_FOLLOWS = "user:edit:follows"
    USER_READ_BLOCKED_USERS = "user:read:blocked_users"
    USER_MANAGE_BLOCKED_USERS = "user:manage:blocked_users"
    USER_READ_BROADCAST = "user:read:broadcast"
    USER_READ_EMAIL = "user:read:email"
    CHANNEL_MODERATE = "channel:moderate"
    CHAT_EDIT = "chat:edit"
    CHAT_READ = "chat:read"
    WHISPERS_READ = "whispers:read"
    WHISPERS_EDIT = "whispers:edit"


TWITCH_FORCE_VERIFY_EXTRA_ARG = "force_verify=true"


def twitch(client_id: str, client_secret: str) -> ProviderDescriptor:
    return ProviderDescriptor(
        client_id=client_id,
        client_secret=client_secret,
        authorization_url="https://id.twitch.tv/oauth2/authorize",
        token_url="https://id.twitch.tv/oauth2/token",
        revocation_url="https://id.twitch.tv/oauth2/revoke",
        issuer=TWITCH,
        capabilities=frozenset(
            {
                Capability.AUTHORIZATION_CODE,
                Capability.IMPLICIT,
                Capability.CLIENT_CREDENTIALS,
                Capability.REVOKE,
            }
        ),
        scopes=TwitchScope,
    )
