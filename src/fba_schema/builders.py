"""Construct root entities from keyed argument bundles.

Each builder declares the mandatory references and formulation defaults of
its entity as an :class:`ArgumentContract`, binds the caller's arguments
against it (mapping, flat key/value list, or keywords, all keyed by wire
names), allocates an id when none is given, and returns a frozen pydantic
entity.

Example:
    >>> ids = SequentialIdAllocator()
    >>> gf = build_gapfilling(fbamodel_ref="ws/model", media_ref="ws/Carbon-D-Glucose", allocator=ids)
    >>> gf.id, gf.time_per_solution
    ('kb|gf.0', 3600)
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import ValidationError

from fba_schema.contracts import (
    ArgumentContract,
    ArgumentContractViolation,
    MissingMandatoryArguments,
    is_empty_value,
)
from fba_schema.datamodel import FBA, FBAModel, Gapfilling, Gapgeneration, ModelTemplate
from fba_schema.datamodel.base import ConfiguredBaseModel
from fba_schema.ids import DEFAULT_NAMESPACE, IdAllocator, new_id

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=ConfiguredBaseModel)

# Callers may name the target model and media the short way
MODEL_AND_MEDIA_ALIASES = {"fbamodel_ref": "model", "media_ref": "media"}

FBA_MODEL_CONTRACT = ArgumentContract(
    "build_fba_model",
    mandatory=("source", "type"),
    optional={
        "gapfillings": [],
        "gapgens": [],
        "biomasses": [],
        "modelcompartments": [],
        "modelcompounds": [],
        "modelreactions": [],
    },
)

FBA_CONTRACT = ArgumentContract(
    "build_fba",
    mandatory=("fbamodel_ref", "media_ref"),
    optional={
        "fva": False,
        "fluxMinimization": False,
        "findMinimalMedia": False,
        "allReversible": False,
        "simpleThermoConstraints": False,
        "thermodynamicConstraints": False,
        "noErrorThermodynamicConstraints": False,
        "minimizeErrorThermodynamicConstraints": False,
        "maximizeObjective": True,
        "comboDeletions": 0,
        "numberOfSolutions": 1,
        "objectiveConstraintFraction": 0.1,
        "defaultMaxFlux": 1000,
        "defaultMaxDrainFlux": 1000,
        "defaultMinDrainFlux": -1000,
        "decomposeReversibleFlux": False,
        "decomposeReversibleDrainFlux": False,
        "fluxUseVariables": False,
        "drainfluxUseVariables": False,
    },
    substitutions=MODEL_AND_MEDIA_ALIASES,
)

GAPFILLING_CONTRACT = ArgumentContract(
    "build_gapfilling",
    mandatory=("fbamodel_ref", "media_ref"),
    optional={
        "mediaHypothesis": False,
        "biomassHypothesis": False,
        "gprHypothesis": False,
        "reactionAdditionHypothesis": True,
        "balancedReactionsOnly": True,
        "completeGapfill": False,
        "reactionActivationBonus": 0,
        "drainFluxMultiplier": 1,
        "directionalityMultiplier": 1,
        "deltaGMultiplier": 1,
        "noStructureMultiplier": 1,
        "noDeltaGMultiplier": 1,
        "biomassTransporterMultiplier": 1,
        "singleTransporterMultiplier": 1,
        "transporterMultiplier": 1,
        "timePerSolution": 3600,
        "totalTimeLimit": 18000,
    },
    substitutions=MODEL_AND_MEDIA_ALIASES,
)

GAPGENERATION_CONTRACT = ArgumentContract(
    "build_gapgeneration",
    mandatory=("fbamodel_ref", "media_ref"),
    optional={
        "mediaHypothesis": False,
        "biomassHypothesis": False,
        "gprHypothesis": False,
        "reactionRemovalHypothesis": True,
        "timePerSolution": 3600,
        "totalTimeLimit": 18000,
    },
    substitutions=MODEL_AND_MEDIA_ALIASES,
)

MODEL_TEMPLATE_CONTRACT = ArgumentContract(
    "build_model_template",
    mandatory=("modelType", "domain", "mapping_ref"),
    optional={"templateReactions": [], "templateBiomasses": []},
)

# Prefixes of allocated ids, per root entity
ID_PREFIXES: dict[str, str] = {
    "FBAModel": "fbamdl.",
    "FBA": "fba.",
    "Gapfilling": "gf.",
    "Gapgeneration": "gg.",
    "ModelTemplate": "tmpl.",
}


def _build(
    entity_class: type[E],
    contract: ArgumentContract,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    allocator: IdAllocator | None,
    namespace: str,
) -> E:
    arguments = contract.bind(*args, **kwargs)

    if is_empty_value(arguments.get("id")):
        if allocator is None:
            rendered = contract.usage(arguments)
            raise MissingMandatoryArguments(
                f"Mandatory arguments id missing and no id allocator given. Usage: {rendered}",
                context=contract.context,
                usage=rendered,
                missing=["id"],
            )
        arguments["id"] = new_id(ID_PREFIXES[entity_class.__name__], allocator, namespace)

    try:
        entity = entity_class.model_validate(arguments)
    except ValidationError as e:
        raise ArgumentContractViolation(
            f"Invalid arguments to {contract.context}: {e}",
            context=contract.context,
            usage=contract.usage(arguments),
        ) from e

    logger.debug(f"Built {entity_class.__name__} {arguments['id']}")
    return entity


def build_fba_model(
    *args: Any,
    allocator: IdAllocator | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    **kwargs: Any,
) -> FBAModel:
    """Build an FBAModel.

    ``source`` and ``type`` are mandatory. ``source_id`` defaults to the id.

    Raises:
        ArgumentContractViolation: On missing or invalid arguments
    """
    model = _build(FBAModel, FBA_MODEL_CONTRACT, args, kwargs, allocator, namespace)
    if model.source_id is None:
        model = model.model_copy(update={"source_id": model.id})
    return model


def build_fba(
    *args: Any,
    allocator: IdAllocator | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    **kwargs: Any,
) -> FBA:
    """Build an FBA formulation against a model and media.

    ``fbamodel_ref`` (or ``model``) and ``media_ref`` (or ``media``) are
    mandatory; solver options default to a single maximizing solve.
    """
    return _build(FBA, FBA_CONTRACT, args, kwargs, allocator, namespace)


def build_gapfilling(
    *args: Any,
    allocator: IdAllocator | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    **kwargs: Any,
) -> Gapfilling:
    """Build a gap-filling formulation.

    Defaults: reaction-addition hypothesis on, balanced reactions only, all
    penalty multipliers 1, one hour per solution and five hours in total.
    """
    return _build(Gapfilling, GAPFILLING_CONTRACT, args, kwargs, allocator, namespace)


def build_gapgeneration(
    *args: Any,
    allocator: IdAllocator | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    **kwargs: Any,
) -> Gapgeneration:
    """Build a gap-generation formulation."""
    return _build(Gapgeneration, GAPGENERATION_CONTRACT, args, kwargs, allocator, namespace)


def build_model_template(
    *args: Any,
    allocator: IdAllocator | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    **kwargs: Any,
) -> ModelTemplate:
    """Build a ModelTemplate; ``modelType``, ``domain`` and ``mapping_ref`` are mandatory."""
    return _build(ModelTemplate, MODEL_TEMPLATE_CONTRACT, args, kwargs, allocator, namespace)
