"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, buildplan.toml only contains
overrides. The defaults reproduce a Flutter Android root build script that
routes every fetch through regional mirrors and moves build output two
levels up, next to the Flutter project's own ``build/``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

ALIYUN_GOOGLE = "https://maven.aliyun.com/repository/google"
ALIYUN_PUBLIC = "https://maven.aliyun.com/repository/public"
ALIYUN_GRADLE_PLUGIN = "https://maven.aliyun.com/repository/gradle-plugin"


# --- buildplan.toml sections ---


class PluginConfig(BaseModel):
    """One ``[[plugins]]`` entry."""

    model_config = {"frozen": True}

    id: str
    apply: bool = False
    version: str | None = None


def default_plugins() -> list[PluginConfig]:
    return [
        PluginConfig(id="com.android.application"),
        PluginConfig(id="com.android.library"),
        PluginConfig(id="org.jetbrains.kotlin.android"),
    ]


class RepositoriesConfig(BaseModel):
    """[repositories] section. Lists are in priority order."""

    model_config = {"frozen": True}

    plugins: list[str] = Field(
        default_factory=lambda: [ALIYUN_GOOGLE, ALIYUN_PUBLIC, ALIYUN_GRADLE_PLUGIN]
    )
    dependencies: list[str] = Field(default_factory=lambda: [ALIYUN_GOOGLE, ALIYUN_PUBLIC])


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    default_dir: str = "build"
    relocate: str = "../../build"


class ProjectsConfig(BaseModel):
    """[projects] section.

    ``include`` of None means: discover from settings.gradle(.kts).
    ``evaluation_depends_on`` applies to every subproject except itself;
    ``depends_on`` adds per-project constraints on top.
    ``repositories`` maps a subproject name to extra mirrors appended
    after the root list of the requested scope.
    """

    model_config = {"frozen": True}

    include: list[str] | None = None
    evaluation_depends_on: str | None = ":app"
    depends_on: dict[str, list[str]] = Field(default_factory=dict)
    repositories: dict[str, list[str]] = Field(default_factory=dict)
