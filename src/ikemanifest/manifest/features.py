# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Feature resolution and activation closure."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from ikemanifest.core.model_types import DependencyTable, LogComponent
from ikemanifest.exceptions import FeatureCycleError, UndefinedFeatureError
from ikemanifest.logging import structured_extra

from .dependencies import validate_dependency_table
from .models import Feature

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from .raw import RawFeature

__all__ = ["compute_feature_closure", "resolve_feature", "resolve_features"]

logger: logging.Logger = logging.getLogger("ike.features")


class _Visit(enum.Enum):
    ACTIVE = enum.auto()
    DONE = enum.auto()


def resolve_feature(name: str, raw: RawFeature) -> Feature:
    """Validate one feature definition.

    Only the feature's own data is checked: its dependency table goes through
    the dependency validator, while ``files`` and ``depends_on`` are copied
    verbatim.

    Args:
        name: Feature key within the manifest.
        raw: Parsed feature definition.

    Returns:
        Feature: Canonical feature.
    """
    dependencies = validate_dependency_table(
        raw.dependencies,
        table=DependencyTable.DEPENDENCIES.for_feature(name),
    )
    feature = Feature(
        name=name,
        dependencies=dependencies,
        files=tuple(raw.files),
        depends_on=tuple(raw.depends_on or ()),
    )
    logger.debug(
        "Resolved feature with %d dependency(ies) and %d file(s)",
        len(feature.dependencies),
        len(feature.files),
        extra=structured_extra(LogComponent.FEATURES, feature=name),
    )
    return feature


def resolve_features(raw_features: Mapping[str, RawFeature] | None) -> dict[str, Feature]:
    """Validate every feature of a manifest."""
    if not raw_features:
        return {}
    return {name: resolve_feature(name, raw) for name, raw in raw_features.items()}


def compute_feature_closure(features: Mapping[str, Feature], selected: Iterable[str]) -> tuple[str, ...]:
    """Compute the features to activate for an initial selection.

    The traversal is iterative and visits each feature at most once. Every
    feature appears after the features it depends on.

    Args:
        features: Declared features keyed by name.
        selected: Initially requested feature names.

    Returns:
        tuple[str, ...]: Names of all features to activate.

    Raises:
        UndefinedFeatureError: A selected or referenced name is not declared.
        FeatureCycleError: A cycle is reachable from the selection.
    """
    order: list[str] = []
    state: dict[str, _Visit] = {}

    for root in selected:
        if root not in features:
            raise UndefinedFeatureError(root)
        if state.get(root) is _Visit.DONE:
            continue
        state[root] = _Visit.ACTIVE
        stack: list[tuple[str, Iterator[str]]] = [(root, iter(features[root].depends_on))]
        while stack:
            current, pending = stack[-1]
            child = next(pending, None)
            if child is None:
                _ = stack.pop()
                state[current] = _Visit.DONE
                order.append(current)
                continue
            if child not in features:
                raise UndefinedFeatureError(child, referenced_by=current)
            mark = state.get(child)
            if mark is _Visit.ACTIVE:
                names = [name for name, _ in stack]
                raise FeatureCycleError([*names[names.index(child) :], child])
            if mark is _Visit.DONE:
                continue
            state[child] = _Visit.ACTIVE
            stack.append((child, iter(features[child].depends_on)))

    logger.debug(
        "Activated %d feature(s)",
        len(order),
        extra=structured_extra(LogComponent.FEATURES, details={"features": list(order)}),
    )
    return tuple(order)
