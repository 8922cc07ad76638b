from __future__ import annotations

from typing import Any, TypeAlias

import numpy as np
import numpy.typing as npt

NDArrayInt: TypeAlias = npt.NDArray[np.integer[Any]]

# One RDS group: four 16-bit blocks, None where the block failed its checkword
Blocks: TypeAlias = tuple[int | None, int | None, int | None, int | None]
