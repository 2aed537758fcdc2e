"""Multi-Step Session for free-text input.

    AwaitingButton -> (AwaitingFormSubmission | Cancelled | TimedOut) -> Resolved

The posted message carries an "enter text" and a "cancel" button. A click
on enter opens a form; its submission is awaited with a fresh window of
the same length, starting when the form is shown. Timeouts at either
stage produce the same result shape.
"""

from __future__ import annotations

from discord_approval.interaction import render
from discord_approval.interaction.ports import ChatChannel
from discord_approval.interaction.router import InteractionRouter
from discord_approval.interaction.schemas import TextInputResult
from discord_approval.interaction.session import InteractionSession, SessionState


class TextInputSession(InteractionSession):
    def __init__(
        self,
        channel: ChatChannel,
        router: InteractionRouter,
        timeout: float,
        title: str,
        prompt: str,
        placeholder: str | None = None,
        multiline: bool = False,
    ) -> None:
        super().__init__(channel, router, timeout, kind="text input")
        self.title = title
        self.prompt = prompt
        self.placeholder = placeholder
        self.multiline = multiline
        self.enter_id = self.control_id("text_input")
        self.cancel_id = self.control_id("text_input_cancel")
        self.form_id = self.control_id("text_input_modal")

    async def run(self) -> TextInputResult:
        try:
            await self.open(
                render.text_input_request(self.prompt, self.enter_id, self.cancel_id),
                {self.enter_id, self.cancel_id},
            )
            click = await self.await_action()
            if click is None:
                return await self._timed_out()

            if click.custom_id == self.cancel_id:
                self.resolve(SessionState.CANCELLED)
                await self.acknowledge(click, render.text_input_cancelled(self.prompt))
                return TextInputResult(cancelled=True)

            form = render.text_input_form(
                self.form_id, self.title, self.prompt, self.placeholder, self.multiline
            )
            with self.router.expect({self.form_id}) as waiter:
                await click.show_form(form)
                submission = await waiter.wait(self.timeout)
            if submission is None:
                self.state = SessionState.TIMED_OUT
                return await self._timed_out()

            text = submission.fields.get(render.TEXT_INPUT_FIELD, "")
            self.resolve()
            await submission.acknowledge()
        except Exception as e:
            self.fail(e)
            return TextInputResult(error=str(e))

        await self.rewrite(render.text_input_received(self.prompt, text))
        return TextInputResult(text=text)

    async def _timed_out(self) -> TextInputResult:
        await self.rewrite(render.timed_out(self.prompt))
        return TextInputResult(timed_out=True)


async def request_text_input(
    channel: ChatChannel,
    router: InteractionRouter,
    title: str,
    prompt: str,
    placeholder: str | None,
    multiline: bool,
    timeout: float,
) -> TextInputResult:
    session = TextInputSession(
        channel, router, timeout, title, prompt, placeholder=placeholder, multiline=multiline
    )
    return await session.run()
