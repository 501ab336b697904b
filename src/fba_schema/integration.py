"""Integrate gap-filling and gap-generation solutions into a model.

Integration records on the model which solution of an analysis was
applied. Models are frozen, so each function returns a new FBAModel and
leaves its input untouched.
"""

from __future__ import annotations

import logging
from typing import Any

from fba_schema.contracts import ArgumentContract
from fba_schema.datamodel import FBAModel, Gapfilling, Gapgeneration, ModelGapfill, ModelGapgen
from fba_schema.validation.values import is_integer
from fba_schema.verbose import VerboseSink

logger = logging.getLogger(__name__)


class IntegrationError(ValueError):
    """A solution cannot be integrated into the model."""


INTEGRATE_GAPFILL_CONTRACT = ArgumentContract(
    "integrate_gapfill_solution",
    mandatory=("gapfill_ref", "solution"),
    optional={"gapfill_id": "", "media_ref": ""},
    substitutions={"solution": "integrated_solution"},
)

INTEGRATE_GAPGEN_CONTRACT = ArgumentContract(
    "integrate_gapgen_solution",
    mandatory=("gapgen_ref", "solution"),
    optional={"gapgen_id": "", "media_ref": ""},
    substitutions={"solution": "integrated_solution"},
)


def _solution_index(value: Any, count: int, ref: str) -> int:
    if not is_integer(value):
        raise IntegrationError(f"Solution index must be an integer, got {value!r}")
    index = int(value)
    if not 0 <= index < count:
        raise IntegrationError(f"Solution {index} is out of range: {ref} has {count} solution(s)")
    return index


def _integrate(
    model: FBAModel,
    list_name: str,
    record_class: type[ModelGapfill] | type[ModelGapgen],
    id_field: str,
    ref_field: str,
    ref: str,
    record_id: str,
    index: int,
    media_ref: str | None,
) -> FBAModel:
    records: list[Any] = list(getattr(model, list_name))

    position = next((i for i, r in enumerate(records) if getattr(r, ref_field) == ref), None)
    if position is None:
        position = next((i for i, r in enumerate(records) if getattr(r, id_field) == record_id), None)

    if position is None:
        records.append(
            record_class.model_validate(
                {
                    id_field: record_id,
                    ref_field: ref,
                    "integrated": True,
                    "integrated_solution": index,
                    "media_ref": media_ref,
                }
            )
        )
    else:
        current = records[position]
        if current.integrated and current.integrated_solution not in (None, index):
            raise IntegrationError(
                f"{ref} is already integrated into {model.id} with solution {current.integrated_solution}"
            )
        records[position] = current.model_copy(
            update={
                ref_field: ref,
                "integrated": True,
                "integrated_solution": index,
                "media_ref": media_ref or current.media_ref,
            }
        )

    return model.model_copy(update={list_name: records})


def integrate_gapfill_solution(
    model: FBAModel,
    gapfilling: Gapfilling,
    *args: Any,
    verbose: VerboseSink | None = None,
    **kwargs: Any,
) -> FBAModel:
    """Mark one solution of a gap-filling as integrated into a model.

    Arguments:
        gapfill_ref: Reference of the gap-filling object
        solution: Index into its solutions (alias ``integrated_solution``)
        gapfill_id: Id of the model's link record (defaults to the gap-filling id)
        media_ref: Media the solution was found on (defaults to the gap-filling's)

    Returns:
        New FBAModel; the ModelGapfill matching ``gapfill_ref`` (or else
        ``gapfill_id``) is updated, or appended when there is none

    Raises:
        IntegrationError: If the index is out of range or a different
            solution is already integrated
    """
    arguments = INTEGRATE_GAPFILL_CONTRACT.bind(*args, **kwargs)
    ref = arguments["gapfill_ref"]
    index = _solution_index(arguments["solution"], len(gapfilling.solutions), ref)

    updated = _integrate(
        model,
        "gapfillings",
        ModelGapfill,
        "gapfill_id",
        "gapfill_ref",
        ref,
        arguments["gapfill_id"] or gapfilling.id,
        index,
        arguments["media_ref"] or gapfilling.media_ref,
    )
    logger.info(f"Integrated gap-filling solution {index} of {ref} into {model.id}")
    (verbose or VerboseSink.disabled())(f"Integrated gapfilling solution {index} from {ref} into model {model.id}")
    return updated


def integrate_gapgen_solution(
    model: FBAModel,
    gapgeneration: Gapgeneration,
    *args: Any,
    verbose: VerboseSink | None = None,
    **kwargs: Any,
) -> FBAModel:
    """Mark one solution of a gap-generation as integrated into a model.

    Takes ``gapgen_ref``, ``solution`` and optionally ``gapgen_id`` and
    ``media_ref``; otherwise as :func:`integrate_gapfill_solution`.
    """
    arguments = INTEGRATE_GAPGEN_CONTRACT.bind(*args, **kwargs)
    ref = arguments["gapgen_ref"]
    index = _solution_index(arguments["solution"], len(gapgeneration.solutions), ref)

    updated = _integrate(
        model,
        "gapgens",
        ModelGapgen,
        "gapgen_id",
        "gapgen_ref",
        ref,
        arguments["gapgen_id"] or gapgeneration.id,
        index,
        arguments["media_ref"] or gapgeneration.media_ref,
    )
    logger.info(f"Integrated gap-generation solution {index} of {ref} into {model.id}")
    (verbose or VerboseSink.disabled())(f"Integrated gapgen solution {index} from {ref} into model {model.id}")
    return updated
