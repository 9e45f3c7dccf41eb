"""Profile stores for diff mode (``xdiff``) and single-request mode (``xreq``)."""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from xdiff.config.loader import YamlConfigMixin
from xdiff.errors import ConfigParseError, InvalidShape, ProfileNotFound, ValidationError
from xdiff.modules.diff import RenderedDiff, diff_text
from xdiff.modules.request import ExtraArgs, RequestExecutor, RequestProfile
from xdiff.modules.response import CanonicalText, ResponseProfile, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiffProfile:
    """Two requests whose responses are compared, plus the response filter."""

    req1: RequestProfile
    req2: RequestProfile
    res: ResponseProfile = field(default_factory=ResponseProfile)

    @classmethod
    def from_dict(cls, data: Any) -> "DiffProfile":
        if not isinstance(data, Mapping):
            raise ConfigParseError("Diff profile must be a mapping with req1 and req2")
        for side in ("req1", "req2"):
            if side not in data:
                raise ConfigParseError(f"Diff profile is missing '{side}'")
        return cls(
            req1=RequestProfile.from_dict(data["req1"]),
            req2=RequestProfile.from_dict(data["req2"]),
            res=ResponseProfile.from_dict(data.get("res")),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"req1": self.req1.to_dict(), "req2": self.req2.to_dict()}
        if not self.res.is_default():
            data["res"] = self.res.to_dict()
        return data

    def validate(self) -> None:
        for side, request in (("req1", self.req1), ("req2", self.req2)):
            try:
                request.validate()
            except InvalidShape as exc:
                raise InvalidShape(f"{side} failed to validate: {exc}") from exc

    async def texts(
        self,
        executor: RequestExecutor,
        args: ExtraArgs | None = None,
        concurrent: bool = True,
    ) -> tuple[CanonicalText, CanonicalText]:
        """Send both requests and normalize both responses with the profile's filter."""
        # Merge both sides first so a bad override fails before any request is sent.
        resolved1 = self.req1.with_overrides(args)
        resolved2 = self.req2.with_overrides(args)

        if concurrent:
            res1, res2 = await asyncio.gather(executor.send(resolved1), executor.send(resolved2))
        else:
            res1 = await executor.send(resolved1)
            res2 = await executor.send(resolved2)

        return normalize(res1, self.res), normalize(res2, self.res)

    async def diff(
        self,
        executor: RequestExecutor,
        args: ExtraArgs | None = None,
        concurrent: bool = True,
    ) -> RenderedDiff:
        """Send both requests and diff their canonical texts."""
        text1, text2 = await self.texts(executor, args, concurrent=concurrent)
        return diff_text(str(text1), str(text2))


def build_profile(
    req1: RequestProfile,
    req2: RequestProfile,
    res: ResponseProfile | None = None,
) -> DiffProfile:
    """Assemble and validate a diff profile from already-parsed parts."""
    profile = DiffProfile(req1=req1, req2=req2, res=res or ResponseProfile())
    profile.validate()
    return profile


class ProfileStore(YamlConfigMixin):
    """Named profiles of one kind, read-only once loaded."""

    profile_type: ClassVar[Any]

    def __init__(self, profiles: Mapping[str, Any] | None = None, source: str | None = None):
        self.profiles = dict(profiles or {})
        self.source = source

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: str | None = None):
        profiles = {}
        for name, raw in data.items():
            try:
                profiles[str(name)] = cls.profile_type.from_dict(raw)
            except ConfigParseError as exc:
                raise ConfigParseError(f"Profile {str(name)!r}: {exc}") from exc
        return cls(profiles, source=source)

    @classmethod
    def single(cls, name: str, profile: Any):
        """A store holding exactly one profile, as emitted by the parse commands."""
        return cls({name: profile})

    def to_dict(self) -> dict[str, Any]:
        return {name: profile.to_dict() for name, profile in self.profiles.items()}

    def validate(self) -> None:
        """
        Validate every profile, in name order.

        Raises:
            ValidationError: naming every invalid profile and its cause.
        """
        failures: dict[str, Exception] = {}
        for name in sorted(self.profiles):
            try:
                self.profiles[name].validate()
            except ValidationError as exc:
                failures[name] = exc
        if failures:
            details = "\n".join(f"  {name}: {exc}" for name, exc in failures.items())
            raise ValidationError(
                f"Failed to validate profile(s) {', '.join(failures)}:\n{details}",
                failures,
            )
        logger.debug("Validated %d profile(s)", len(self.profiles))

    def get_profile(self, name: str):
        """Return the named profile or raise ``ProfileNotFound``."""
        try:
            return self.profiles[name]
        except KeyError:
            raise ProfileNotFound(name, self.source) from None

    def __contains__(self, name: object) -> bool:
        return name in self.profiles

    def __len__(self) -> int:
        return len(self.profiles)


class DiffConfig(ProfileStore):
    """Profiles for ``xdiff``: name -> DiffProfile."""

    profile_type = DiffProfile

    def get_profile(self, name: str) -> DiffProfile:
        return super().get_profile(name)


class RequestConfig(ProfileStore):
    """Profiles for ``xreq``: name -> RequestProfile."""

    profile_type = RequestProfile

    def get_profile(self, name: str) -> RequestProfile:
        return super().get_profile(name)
