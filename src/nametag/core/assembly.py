"""Name tag assembly.

This module composes the final tag from its parts:
- front text, raised on the top face
- back label, mirrored and engraved into the bottom face
- body, the hull of four corner circles
- lanyard slot, a stadium cut through the body
- decorative gear, unioned to the right of the body

The text and gear parts do not depend on each other and can be built in
worker processes. Parts cross the process boundary as dictionaries
(Solid.to_dict / GearSpec.to_dict), so serial and parallel builds combine
bit-identical inputs in the same order.

Key components:
- build_part: Top-level picklable function building one part
- NameTagBuilder: Orchestrates parts, booleans and validation
- NameTag: Build result
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from nametag.config import NameTagSettings, UnknownGlyphPolicy, get_default_settings
from nametag.core.gear import involute_gear
from nametag.core.planar import hull
from nametag.core.primitives import circle
from nametag.core.solid import Solid
from nametag.core.text import measure_text
from nametag.domain import ColoredSolid, GearSpec
from nametag.exceptions import AssemblyError, NameTagError
from nametag.utils import BuildLogger, BuildStats

FRONT_TEXT = "front_text"
BACK_TEXT = "back_text"
GEAR = "gear"

SLOT_RADIUS = 2.5
SLOT_RESOLUTION = 32
SLOT_INSET = 5.0
# Slot cutter overshoots both faces so it shares no plane with the body
SLOT_OVERSHOOT = 1.0
GEAR_POSITION_DIVISOR = 1.5
BACK_TEXT_OFFSET = (8.0, 0.0, -0.1)
FRONT_TEXT_SINK = 0.1

T = TypeVar("T")


def build_part(name: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Build one independent part of the tag.

    Args:
        name: FRONT_TEXT, BACK_TEXT or GEAR
        payload: Text parameters, or a serialized GearSpec plus epsilon

    Returns:
        {"solid": solid_dict, "length": float} for text parts,
        {"solid": solid_dict} for the gear
    """
    if name == GEAR:
        spec = GearSpec.from_dict(payload["spec"])
        return {"solid": involute_gear(spec, payload["epsilon"]).to_dict()}

    measured = measure_text(
        payload["text"],
        font_weight=payload["font_weight"],
        font_width=payload["font_width"],
        text_thickness=payload["text_thickness"],
        unknown_glyphs=UnknownGlyphPolicy(payload["unknown_glyphs"]),
    )
    return {"solid": measured.solid.to_dict(), "length": measured.length}


def build_part_worker(name: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Build a part in a worker process.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Failures are returned as data since the exception classes carry
    structured constructor arguments.

    Returns:
        Dictionary containing either:
        - Success: the build_part result plus "duration_ms"
        - Error: {"error": str, "error_type": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()
    try:
        result = build_part(name, payload)
    except Exception as e:
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }
    result["duration_ms"] = (time.time() - start_time) * 1000
    return result


@dataclass(frozen=True)
class NameTag:
    """A finished name tag.

    Attributes:
        solid: Final composite solid, faces tagged with their region colour
        regions: Coloured parts (body structure, front text)
        text_length: Half length of the body derived from the front text
        stats: Build statistics
    """

    solid: Solid
    regions: tuple[ColoredSolid, ...]
    text_length: float
    stats: BuildStats


class NameTagBuilder:
    """Builds a name tag solid from settings.

    Pipeline:
    1. Build the front text, back label and gear (optionally in parallel)
    2. Hull the four corner circles into the body and extrude it
    3. Union body and gear, cut the slot and the mirrored back label
    4. Raise the front text onto the top face and union it
    5. Check the result is watertight

    Example:
        builder = NameTagBuilder(get_default_settings())
        tag = builder.build()
        mesh = tag.solid.to_mesh()
    """

    def __init__(
        self,
        settings: NameTagSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            settings: Build settings (defaults if None)
            logger: Structured logger (the "nametag" logger if None)
        """
        self.settings = settings if settings is not None else get_default_settings()
        self.logger = logger if logger is not None else structlog.get_logger("nametag")
        self.build_logger = BuildLogger(self.logger)

    def build(self) -> NameTag:
        """Build the tag.

        Returns:
            NameTag with the final solid and its coloured regions

        Raises:
            AssemblyError: If any step fails; chained to the underlying
                NameTagError where one was raised in this process
        """
        tag = self.settings.tag
        epsilon = self.settings.geometry.epsilon
        self.build_logger = BuildLogger(self.logger)
        stats = self.build_logger.stats
        stats.start_time = time.time()

        self.logger.info(
            "Starting name tag build",
            text=tag.name_text,
            back_text=tag.back_text,
            max_workers=self.settings.processing.max_workers,
        )

        gear_spec = self._step(GEAR, lambda: self.settings.gear.to_spec(tag.thickness))
        payloads = self._part_payloads(gear_spec)

        if self.settings.processing.max_workers > 1:
            parts = self._build_parts_parallel(payloads)
        else:
            parts = self._build_parts_serial(payloads)

        length = parts[FRONT_TEXT]["length"]
        front_text = Solid.from_dict(parts[FRONT_TEXT]["solid"])
        back_text = Solid.from_dict(parts[BACK_TEXT]["solid"])
        gear = Solid.from_dict(parts[GEAR]["solid"])

        body = self._step("body", lambda: self._body(length))
        slot = self._step("slot", lambda: self._slot(length))

        gear = gear.translate((length / GEAR_POSITION_DIVISOR, 0.0, tag.thickness / 2))
        structure = self._boolean("union", body, gear, epsilon)
        structure = self._boolean("difference", structure, slot, epsilon)
        if not back_text.is_empty:
            engraving = back_text.mirror((1.0, 0.0, 0.0)).translate(BACK_TEXT_OFFSET)
            structure = self._boolean("difference", structure, engraving, epsilon)
        structure = structure.colored(tag.body_color)

        text = front_text.translate((0.0, 0.0, tag.thickness - FRONT_TEXT_SINK)).colored(
            tag.text_color
        )
        solid = self._boolean("union", structure, text, epsilon)

        if self.settings.geometry.validate_manifold:
            solid = self._step(
                "validate",
                lambda: solid.validate(self.settings.geometry.weld_tolerance),
            )
            self.build_logger.log_validation(
                vertices=len(set(solid.vertices())),
                faces=len(solid.faces),
            )

        stats.faces = len(solid.faces)
        stats.end_time = time.time()

        self.logger.info(
            "Name tag built",
            faces=stats.faces,
            booleans=stats.booleans,
            text_length=round(length, 3),
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return NameTag(
            solid=solid,
            regions=(
                ColoredSolid(structure, tag.body_color),
                ColoredSolid(text, tag.text_color),
            ),
            text_length=length,
            stats=stats,
        )

    def _part_payloads(self, gear_spec: GearSpec) -> dict[str, dict[str, Any]]:
        tag = self.settings.tag
        return {
            FRONT_TEXT: {
                "text": tag.name_text,
                "font_weight": tag.font_weight,
                "font_width": tag.font_width,
                "text_thickness": tag.text_thickness,
                "unknown_glyphs": tag.unknown_glyphs.value,
            },
            BACK_TEXT: {
                "text": tag.back_text,
                "font_weight": tag.back_font_weight,
                "font_width": tag.back_font_width,
                "text_thickness": tag.text_thickness,
                "unknown_glyphs": tag.unknown_glyphs.value,
            },
            GEAR: {
                "spec": gear_spec.to_dict(),
                "epsilon": self.settings.geometry.epsilon,
            },
        }

    def _build_parts_serial(
        self, payloads: dict[str, dict[str, Any]]
    ) -> dict[str, dict[str, Any]]:
        parts: dict[str, dict[str, Any]] = {}
        for name, payload in payloads.items():
            self.build_logger.log_part_start(name)
            start_time = time.time()
            parts[name] = self._step(name, lambda: build_part(name, payload))
            self.build_logger.log_part_complete(
                name,
                faces=len(parts[name]["solid"]["faces"]),
                duration_ms=(time.time() - start_time) * 1000,
            )
        return parts

    def _build_parts_parallel(
        self, payloads: dict[str, dict[str, Any]]
    ) -> dict[str, dict[str, Any]]:
        """Build parts in parallel using ProcessPoolExecutor.

        Args:
            payloads: Part name to build_part payload

        Returns:
            Part name to build_part result
        """
        max_workers = min(self.settings.processing.max_workers, len(payloads))
        self.logger.info(
            "Starting parallel part build",
            part_count=len(payloads),
            max_workers=max_workers,
        )

        parts: dict[str, dict[str, Any]] = {}
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            pending_futures = {}
            for name, payload in payloads.items():
                self.build_logger.log_part_start(name)
                pending_futures[executor.submit(build_part_worker, name, payload)] = name

            for future in as_completed(pending_futures):
                name = pending_futures[future]
                result = future.result()
                if "error" in result:
                    error = AssemblyError(name, f"{result['error_type']}: {result['error']}")
                    self.build_logger.log_part_error(name, error)
                    self.logger.debug("Worker traceback", part=name, traceback=result["traceback"])
                    executor.shutdown(wait=True, cancel_futures=True)
                    raise error
                parts[name] = result
                self.build_logger.log_part_complete(
                    name,
                    faces=len(result["solid"]["faces"]),
                    duration_ms=result["duration_ms"],
                )

        return parts

    def _step(self, name: str, fn: Callable[[], T]) -> T:
        """Run one build step, wrapping library errors into AssemblyError."""
        try:
            return fn()
        except NameTagError as e:
            self.build_logger.log_part_error(name, e)
            raise AssemblyError(name, str(e)) from e

    def _boolean(self, operation: str, left: Solid, right: Solid, epsilon: float) -> Solid:
        result = self._step(operation, lambda: getattr(left, operation)(right, epsilon))
        self.build_logger.log_boolean(
            operation,
            left_faces=len(left.faces),
            right_faces=len(right.faces),
            result_faces=len(result.faces),
        )
        return result

    def _body(self, length: float) -> Solid:
        tag = self.settings.tag
        r = tag.corner_radius
        corners = [
            circle(r, tag.resolution, (sx * (length - r), sy * (tag.width - r)))
            for sx in (1, -1)
            for sy in (1, -1)
        ]
        return hull(*corners).extrude((0.0, 0.0, tag.thickness))

    def _slot(self, length: float) -> Solid:
        thickness = self.settings.tag.thickness
        outline = hull(
            circle(SLOT_RADIUS, SLOT_RESOLUTION, (0.0, -SLOT_RADIUS)),
            circle(SLOT_RADIUS, SLOT_RESOLUTION, (0.0, SLOT_RADIUS)),
        )
        return outline.extrude((0.0, 0.0, thickness + 2 * SLOT_OVERSHOOT)).translate(
            (-length + SLOT_INSET, 0.0, -SLOT_OVERSHOOT)
        )
