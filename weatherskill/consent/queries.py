from .. import db


async def get_consent_token(*, user_id: str) -> str | None:
    return await db.fetchval(
        "SELECT token FROM consent_token WHERE user_id = $1", user_id
    )


async def save_consent_token(*, user_id: str, token: str) -> None:
    """
    Store the consent token for a user, replacing any previous token.
    """

    await db.execute(
        """
        INSERT INTO consent_token (user_id, token, updated_at)
        VALUES ($1, $2, now())
        ON CONFLICT (user_id) DO UPDATE
        SET token = EXCLUDED.token, updated_at = EXCLUDED.updated_at
        """,
        user_id,
        token,
    )
