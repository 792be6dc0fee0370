"""Discord client: posts flag buttons under messages and answers clicks with a translation."""

import asyncio
from typing import Dict, FrozenSet, Optional

import discord

from src.bot import buttons
from src.config import FLAG_TO_LANG, get_allowed_channels, get_discord_token, get_translator_config
from src.logger import get_logger
from src.translation import translate

logger = get_logger(__name__)


def build_view(message_id: int, flag_to_lang: Dict[str, str]) -> Optional[discord.ui.View]:
    """Create the button view for a message, or None when no buttons can be built."""
    rows = buttons.build_flag_rows(flag_to_lang, message_id)
    if not rows:
        return None

    view = discord.ui.View(timeout=None)
    for row_index, row in enumerate(rows):
        for button in row:
            view.add_item(
                discord.ui.Button(
                    style=discord.ButtonStyle.secondary,
                    label=button.label,
                    custom_id=button.custom_id,
                    row=row_index,
                )
            )
    return view


class TranslateBot(discord.Client):
    """Flag translation bot."""

    def __init__(
        self,
        allowed_channels: FrozenSet[str] = frozenset(),
        flag_to_lang: Optional[Dict[str, str]] = None,
    ):
        intents = discord.Intents.default()
        # Message Content Intent must also be enabled in the Developer Portal
        intents.message_content = True
        intents.guild_messages = True
        super().__init__(intents=intents)
        self.allowed_channels = allowed_channels
        self.flag_to_lang = dict(FLAG_TO_LANG if flag_to_lang is None else flag_to_lang)

    async def on_ready(self):
        logger.info(f"Logged in as {self.user}")

    async def on_message(self, message: discord.Message):
        try:
            if message.author.bot:
                return
            if message.guild is None or message.channel is None:
                return
            if not buttons.is_allowed_channel(message.channel.id, self.allowed_channels):
                return
            if not (message.content or '').strip():
                return

            view = build_view(message.id, self.flag_to_lang)
            no_ping = discord.AllowedMentions(replied_user=False)

            if view is None:
                logger.warning("No valid button rows, replying without components")
                await message.reply(buttons.PROMPT_TEXT, allowed_mentions=no_ping)
                return

            await message.reply(buttons.PROMPT_TEXT, view=view, allowed_mentions=no_ping)
            # Clicks are handled in on_interaction so they keep working after a restart
            view.stop()
        except Exception:
            logger.exception("Failed to post translation buttons")

    async def on_interaction(self, interaction: discord.Interaction):
        if interaction.type != discord.InteractionType.component:
            return

        parsed = buttons.parse_custom_id((interaction.data or {}).get('custom_id'))
        if parsed is None:
            return

        try:
            await self.handle_translate_click(interaction, *parsed)
        except Exception:
            logger.exception("Interaction error")
            await self._reply_error(interaction)

    async def handle_translate_click(self, interaction: discord.Interaction, code: str, message_id: str):
        channel = interaction.channel
        if channel is None:
            return

        try:
            original_message = await channel.fetch_message(int(message_id))
        except (ValueError, discord.NotFound, discord.Forbidden, discord.HTTPException):
            await interaction.response.send_message(buttons.NOT_FOUND_TEXT, ephemeral=True)
            return

        original = (original_message.content or '').strip()
        if not original:
            await interaction.response.send_message(buttons.NO_TEXT_TEXT, ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True, thinking=True)

        # translate() blocks on HTTP; keep the gateway loop free
        translated = await asyncio.to_thread(translate, original, code)

        embed = discord.Embed(
            title=buttons.translation_title(code),
            description=translated or buttons.EMPTY_TRANSLATION_TEXT,
            timestamp=discord.utils.utcnow(),
        )
        embed.set_footer(text=buttons.requested_by(interaction.user.name))
        await interaction.edit_original_response(embed=embed)

    async def _reply_error(self, interaction: discord.Interaction):
        try:
            if interaction.response.is_done():
                await interaction.edit_original_response(content=buttons.ERROR_TEXT)
            else:
                await interaction.response.send_message(buttons.ERROR_TEXT, ephemeral=True)
        except discord.HTTPException as e:
            logger.debug(f"Could not send error reply: {e}")


def run_bot(token: Optional[str] = None) -> None:
    """Start the bot with the configured token and channel allowlist."""
    token = token or get_discord_token()
    if not token:
        raise SystemExit("DISCORD_TOKEN is not configured")

    client = TranslateBot(
        allowed_channels=get_allowed_channels(),
        flag_to_lang=dict(get_translator_config().flag_to_lang),
    )
    # Logging is configured through src.logger
    client.run(token, log_handler=None)
