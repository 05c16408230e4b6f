"""Detect frameworks and libraries from declared dependencies."""

from __future__ import annotations

from pathlib import Path

from stackprint.analysis.static.dependency_analyzer import all_dependency_names
from stackprint.analysis.static.schemas import FrameworkDetectionResult

# category → framework → dependency names (any one is enough)
FRAMEWORK_PATTERNS: dict[str, dict[str, tuple[str, ...]]] = {
    "frontend": {
        "react": ("react", "react-dom"),
        "vue": ("vue",),
        "angular": ("@angular/core",),
        "svelte": ("svelte",),
        "next.js": ("next",),
        "nuxt": ("nuxt",),
        "solid": ("solid-js",),
        "preact": ("preact",),
        "lit": ("lit",),
    },
    "backend": {
        "express": ("express",),
        "fastify": ("fastify",),
        "nestjs": ("@nestjs/core", "@nestjs/common"),
        "koa": ("koa",),
        "hapi": ("@hapi/hapi",),
        "fastapi": ("fastapi",),
        "django": ("django",),
        "flask": ("flask",),
        "gin": ("github.com/gin-gonic/gin",),
        "echo": ("github.com/labstack/echo", "github.com/labstack/echo/v4"),
        "fiber": ("github.com/gofiber/fiber", "github.com/gofiber/fiber/v2"),
        "actix": ("actix-web",),
        "rocket": ("rocket",),
        "axum": ("axum",),
        "rails": ("rails",),
        "laravel": ("laravel/framework",),
    },
    "testing": {
        "jest": ("jest", "@jest/globals"),
        "vitest": ("vitest",),
        "mocha": ("mocha",),
        "jasmine": ("jasmine",),
        "testing-library": ("@testing-library/react", "@testing-library/vue"),
        "cypress": ("cypress",),
        "playwright": ("@playwright/test", "playwright"),
        "pytest": ("pytest",),
        "rspec": ("rspec", "rspec-rails"),
        "phpunit": ("phpunit/phpunit",),
    },
    "orm": {
        "prisma": ("prisma", "@prisma/client"),
        "typeorm": ("typeorm",),
        "sequelize": ("sequelize",),
        "mongoose": ("mongoose",),
        "drizzle": ("drizzle-orm",),
        "sqlalchemy": ("sqlalchemy",),
        "gorm": ("gorm.io/gorm",),
        "diesel": ("diesel",),
    },
    "state_management": {
        "redux": ("redux", "@reduxjs/toolkit"),
        "zustand": ("zustand",),
        "pinia": ("pinia",),
        "mobx": ("mobx",),
        "recoil": ("recoil",),
        "jotai": ("jotai",),
        "xstate": ("xstate",),
    },
    "ui_libraries": {
        "material-ui": ("@mui/material", "@material-ui/core"),
        "ant-design": ("antd",),
        "chakra-ui": ("@chakra-ui/react",),
        "tailwindcss": ("tailwindcss",),
        "bootstrap": ("bootstrap",),
        "shadcn-ui": ("@radix-ui/react-dialog",),
    },
    "bundlers": {
        "vite": ("vite",),
        "webpack": ("webpack",),
        "rollup": ("rollup",),
        "parcel": ("parcel",),
        "esbuild": ("esbuild",),
        "turbopack": ("turbopack",),
    },
}


def detect_frameworks(project_path: Path) -> FrameworkDetectionResult:
    """Match every category's table against the project's dependencies."""
    root = Path(project_path)
    names = all_dependency_names(root)

    matched = {
        category: match_category(names, patterns)
        for category, patterns in FRAMEWORK_PATTERNS.items()
    }
    # Go's test runner is built in, so it has no dependency to match.
    if (root / "go.mod").is_file():
        matched["testing"].append("go test")

    return FrameworkDetectionResult(**matched)


def match_category(
    dependency_names: set[str],
    patterns: dict[str, tuple[str, ...]],
) -> list[str]:
    """Frameworks whose markers intersect ``dependency_names``, in table order."""
    return [
        framework
        for framework, markers in patterns.items()
        if any(marker in dependency_names for marker in markers)
    ]
