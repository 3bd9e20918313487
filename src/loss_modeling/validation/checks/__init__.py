"""Validators for the loss modeling pipeline artifacts.

Each validator checks one artifact and returns a fresh, immutable result:

- RawDataValidator -> RawDataResult (raw CAS Schedule P table)
- ModelDataValidator -> ModelDataResult (per company-year modeling table)
- TweedieModelValidator -> TweedieResult (fitted Tweedie GLM)
- EVTModelValidator -> EVTResult (GEV and GPD fits)
- PredictionValidator -> PredictionResult (actual vs. predicted values)

To implement a new validator:

1. Create a new file in this directory (e.g., `my_check.py`)
2. Register its check ids and their severities in validation/config.py
3. Record every finding through a ``DiagnosticCollector``; never raise for
   problems found in the artifact itself
4. Return a result variant defined in validation/models.py
5. Wire it into ``run_validation()`` in registry.py

Example:
    ```python
    # checks/my_check.py
    from loss_modeling.core.enums import DiagnosticKind
    from ..models import ModelDataResult
    from ._common import DiagnosticCollector

    class MyValidator:
        def validate(self, df) -> ModelDataResult:
            collector = DiagnosticCollector()
            if df.empty:
                collector.add("my_check", DiagnosticKind.SCHEMA_ERROR, "Empty table")
            return ModelDataResult(**collector.as_fields())
    ```

Validators are pure: they do not log, write files, or mutate their inputs.
"""

from __future__ import annotations

from ._common import DiagnosticCollector
from .evt import EVTModelValidator
from .model_data import ModelDataValidator
from .predictions import PredictionValidator
from .raw_data import RawDataValidator
from .tweedie import TweedieModelValidator

__all__ = [
    "DiagnosticCollector",
    "RawDataValidator",
    "ModelDataValidator",
    "TweedieModelValidator",
    "EVTModelValidator",
    "PredictionValidator",
]
