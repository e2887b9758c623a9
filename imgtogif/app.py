from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from imgtogif.controllers.command_controller import ImgToGifCommand
from imgtogif.models.image_model import GifFile
from imgtogif.models.message_model import CommandArgs
from imgtogif.models.options_model import ConversionOptions
from imgtogif.services.codec_runtime import CodecRuntime
from imgtogif.services.conversion_service import ConversionPipeline
from imgtogif.services.fetch_service import FetchService
from imgtogif.services.interfaces import MessageStore, Notifier, Uploader


class ImgToGifApp:
    """Точка сборки: возможности разрешаются один раз и передаются явно."""

    def __init__(
        self,
        notifier: Notifier,
        uploader: Optional[Uploader] = None,
        message_store: Optional[MessageStore] = None,
        options: Optional[ConversionOptions] = None,
        fetcher: Optional[FetchService] = None,
        runtime: Optional[CodecRuntime] = None,
    ) -> None:
        options = options or ConversionOptions()
        self._runtime = runtime or CodecRuntime(resample_filter=options.resample)
        self._fetcher = fetcher or FetchService()

        # lazily loaded codec capability, resolved once
        images = self._runtime.ensure_initialized()
        self._pipeline = ConversionPipeline.from_options(
            resampler=images.resample, decoder=images.decode, options=options,
        )
        self._command = ImgToGifCommand(
            notifier=notifier,
            fetcher=self._fetcher,
            pipeline=self._pipeline,
            uploader=uploader,
            message_store=message_store,
        )

    def run(self, args: CommandArgs, channel_id: str) -> Optional[GifFile]:
        return self._command.execute(args, channel_id)

    def run_options(self, options: Iterable[Mapping[str, Any]], channel_id: str) -> Optional[GifFile]:
        return self._command.execute_options(options, channel_id)

    def close(self) -> None:
        self._fetcher.close()
        self._runtime.teardown()

    def __enter__(self) -> "ImgToGifApp":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
