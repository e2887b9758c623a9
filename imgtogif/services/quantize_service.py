from __future__ import annotations

import logging
import warnings
from typing import List, Tuple

import numpy as np

from imgtogif.errors import QuantizationOverflow
from imgtogif.models.image_model import BLACK, PALETTE_SIZE, RGB, IndexedImage, Palette, RawImage

logger = logging.getLogger(__name__)

LEVEL_STEP = 16
KEY_SPACE = 1 << 12  # 16 уровней на канал -> 4096 цветов


class ColorQuantizer:
    def quantize(self, image: RawImage) -> Tuple[Palette, IndexedImage]:
        """
        Равномерное квантование: каждый канал R, G, B -> floor(c / 16) * 16, альфа игнорируется.
        Цвета получают слоты палитры в порядке первого появления; после 256 слотов
        новые цвета отображаются в индекс 0 (с предупреждением QuantizationOverflow).
        Палитра дополняется чёрным до ровно 256 записей.
        """
        rgb = image.as_array()[..., :3].reshape(-1, 3)
        levels = (rgb // LEVEL_STEP).astype(np.uint16)
        # 12-битный ключ цвета: rrrr gggg bbbb
        keys = (levels[:, 0] << 8) | (levels[:, 1] << 4) | levels[:, 2]

        unique_keys, first_seen = np.unique(keys, return_index=True)
        ordered = unique_keys[np.argsort(first_seen, kind="stable")]
        assigned = ordered[:PALETTE_SIZE]

        # Таблица ключ -> индекс; неприсвоенные ключи остаются 0
        lut = np.zeros(KEY_SPACE, dtype=np.uint8)
        lut[assigned] = np.arange(len(assigned), dtype=np.uint8)
        indices = lut[keys]

        dropped = len(ordered) - len(assigned)
        if dropped:
            logger.warning("Palette overflow: %d colors mapped to index 0", dropped)
            warnings.warn(QuantizationOverflow(dropped), stacklevel=2)

        colors: List[RGB] = [self._key_to_rgb(int(key)) for key in assigned]
        colors.extend([BLACK] * (PALETTE_SIZE - len(colors)))
        logger.debug("Quantized %dx%d image to %d distinct colors", image.width, image.height, len(assigned))

        return Palette(tuple(colors)), IndexedImage(image.width, image.height, indices.tobytes())

    # ---------- Вспомогательные функции ----------
    @staticmethod
    def _key_to_rgb(key: int) -> RGB:
        return ((key >> 8) & 0xF) * LEVEL_STEP, ((key >> 4) & 0xF) * LEVEL_STEP, (key & 0xF) * LEVEL_STEP
