"""
Initial VidTube schema.

- users, videos, comments, tweets
- likes (exactly one of video/comment/tweet per row)
- subscriptions, playlists + playlist_videos, watch_history
"""

from alembic import op
import sqlalchemy as sa

# Revision identifiers, used by Alembic.
revision = "20261017_01_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _user_fk(column: str, table: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        [column], ["users.id"], name=op.f(f"fk_{table}_{column}_users"), ondelete="CASCADE"
    )


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=False),
        sa.Column("cover_image", sa.Text(), nullable=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.CheckConstraint("length(username) > 0", name=op.f("ck_users_username_not_blank")),
        sa.CheckConstraint("length(email) > 0", name=op.f("ck_users_email_not_blank")),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_full_name"), "users", ["full_name"])
    op.create_index(op.f("ix_users_created_at"), "users", ["created_at"])

    # --- videos ---
    op.create_table(
        "videos",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("video_file", sa.Text(), nullable=False),
        sa.Column("thumbnail", sa.Text(), nullable=False),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("views", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("is_published", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_videos")),
        _user_fk("owner_id", "videos"),
        sa.CheckConstraint("views >= 0", name=op.f("ck_videos_views_non_negative")),
    )
    op.create_index(op.f("ix_videos_title"), "videos", ["title"])
    op.create_index(op.f("ix_videos_owner_id"), "videos", ["owner_id"])
    op.create_index(op.f("ix_videos_created_at"), "videos", ["created_at"])
    op.create_index("ix_videos_published_created", "videos", ["is_published", "created_at"])

    # --- comments ---
    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("video_id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_comments")),
        sa.ForeignKeyConstraint(
            ["video_id"], ["videos.id"], name=op.f("fk_comments_video_id_videos"), ondelete="CASCADE"
        ),
        _user_fk("owner_id", "comments"),
    )
    op.create_index(op.f("ix_comments_owner_id"), "comments", ["owner_id"])
    op.create_index(op.f("ix_comments_created_at"), "comments", ["created_at"])
    op.create_index("ix_comments_video_created", "comments", ["video_id", "created_at"])

    # --- tweets ---
    op.create_table(
        "tweets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_tweets")),
        _user_fk("owner_id", "tweets"),
    )
    op.create_index(op.f("ix_tweets_owner_id"), "tweets", ["owner_id"])
    op.create_index(op.f("ix_tweets_created_at"), "tweets", ["created_at"])

    # --- likes ---
    op.create_table(
        "likes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("liked_by_id", sa.Uuid(), nullable=False),
        sa.Column("video_id", sa.Uuid(), nullable=True),
        sa.Column("comment_id", sa.Uuid(), nullable=True),
        sa.Column("tweet_id", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_likes")),
        _user_fk("liked_by_id", "likes"),
        sa.ForeignKeyConstraint(
            ["video_id"], ["videos.id"], name=op.f("fk_likes_video_id_videos"), ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["comment_id"], ["comments.id"], name=op.f("fk_likes_comment_id_comments"), ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["tweet_id"], ["tweets.id"], name=op.f("fk_likes_tweet_id_tweets"), ondelete="CASCADE"
        ),
        sa.CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name=op.f("ck_likes_exactly_one_target"),
        ),
        sa.UniqueConstraint("liked_by_id", "video_id", name="uq_likes_user_video"),
        sa.UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_user_comment"),
        sa.UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_user_tweet"),
    )
    op.create_index(op.f("ix_likes_liked_by_id"), "likes", ["liked_by_id"])
    op.create_index(op.f("ix_likes_created_at"), "likes", ["created_at"])
    op.create_index("ix_likes_video_id", "likes", ["video_id"])
    op.create_index("ix_likes_comment_id", "likes", ["comment_id"])
    op.create_index("ix_likes_tweet_id", "likes", ["tweet_id"])

    # --- subscriptions ---
    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("subscriber_id", sa.Uuid(), nullable=False),
        sa.Column("channel_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_subscriptions")),
        _user_fk("subscriber_id", "subscriptions"),
        _user_fk("channel_id", "subscriptions"),
        sa.UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        sa.CheckConstraint("subscriber_id <> channel_id", name=op.f("ck_subscriptions_no_self_subscription")),
    )
    op.create_index(op.f("ix_subscriptions_subscriber_id"), "subscriptions", ["subscriber_id"])
    op.create_index(op.f("ix_subscriptions_channel_id"), "subscriptions", ["channel_id"])
    op.create_index(op.f("ix_subscriptions_created_at"), "subscriptions", ["created_at"])

    # --- playlists ---
    op.create_table(
        "playlists",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_playlists")),
        _user_fk("owner_id", "playlists"),
        sa.UniqueConstraint("owner_id", "name", name="uq_playlists_owner_name"),
    )
    op.create_index(op.f("ix_playlists_owner_id"), "playlists", ["owner_id"])
    op.create_index(op.f("ix_playlists_created_at"), "playlists", ["created_at"])

    op.create_table(
        "playlist_videos",
        sa.Column("playlist_id", sa.Uuid(), nullable=False),
        sa.Column("video_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("playlist_id", "video_id", name=op.f("pk_playlist_videos")),
        sa.ForeignKeyConstraint(
            ["playlist_id"], ["playlists.id"], name=op.f("fk_playlist_videos_playlist_id_playlists"), ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["video_id"], ["videos.id"], name=op.f("fk_playlist_videos_video_id_videos"), ondelete="CASCADE"
        ),
    )
    op.create_index(op.f("ix_playlist_videos_video_id"), "playlist_videos", ["video_id"])

    # --- watch_history ---
    op.create_table(
        "watch_history",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("video_id", sa.Uuid(), nullable=False),
        sa.Column("watched_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_watch_history")),
        _user_fk("user_id", "watch_history"),
        sa.ForeignKeyConstraint(
            ["video_id"], ["videos.id"], name=op.f("fk_watch_history_video_id_videos"), ondelete="CASCADE"
        ),
    )
    op.create_index(op.f("ix_watch_history_video_id"), "watch_history", ["video_id"])
    op.create_index("ix_watch_history_user_watched", "watch_history", ["user_id", "watched_at"])


def downgrade() -> None:
    op.drop_table("watch_history")
    op.drop_table("playlist_videos")
    op.drop_table("playlists")
    op.drop_table("subscriptions")
    op.drop_table("likes")
    op.drop_table("tweets")
    op.drop_table("comments")
    op.drop_table("videos")
    op.drop_table("users")
