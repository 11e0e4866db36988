"""Component tools: module listing, component source code, CSS utility classes."""

from __future__ import annotations

import asyncio
from pathlib import Path

from pkgscout.config import DEFAULT_PACKAGE
from pkgscout.exceptions import PackageError
from pkgscout.indexer.resolver import ExportSourceResolver, get_default_resolver
from pkgscout.packages import get_local_modules_map, verify_local_package
from pkgscout.tools import ToolResult

STYLES_PACKAGE = "@patternfly/react-styles"

UTILITY_CLASSES: dict[str, str] = {
    "Accessibility": "css/utilities/Accessibility/accessibility.css",
    "Alignment": "css/utilities/Alignment/alignment.css",
    "BackgroundColor": "css/utilities/BackgroundColor/background-color.css",
    "BoxShadow": "css/utilities/BoxShadow/box-shadow.css",
    "Display": "css/utilities/Display/display.css",
    "Flex": "css/utilities/Flex/flex.css",
    "Float": "css/utilities/Float/float.css",
    "Sizing": "css/utilities/Sizing/sizing.css",
    "Spacing": "css/utilities/Spacing/spacing.css",
    "Text": "css/utilities/Text/text.css",
}


async def get_available_modules(
    package_name: str, node_modules_root: Path | str | None = None
) -> ToolResult:
    """List the module names a package exposes, separated by semicolons.

    Args:
        package_name: npm package name.
        node_modules_root: node_modules directory. Defaults to ./node_modules.

    Returns:
        ToolResult with the module names or an error message.
    """
    try:
        modules = get_local_modules_map(package_name, node_modules_root)
    except PackageError as exc:
        return ToolResult(
            success=False, output="", error=f"Failed to retrieve available modules: {exc}"
        )
    return ToolResult(success=True, output=";".join(modules))


async def get_component_source_code(
    component_name: str,
    package_name: str = DEFAULT_PACKAGE,
    node_modules_root: Path | str | None = None,
    resolver: ExportSourceResolver | None = None,
) -> ToolResult:
    """Return the source of the file that defines a component.

    The component must be listed in the package's modules map; its defining
    file is then located by scanning the package's src/ tree.

    Args:
        component_name: Exported component name, e.g. "Button".
        package_name: npm package name.
        node_modules_root: node_modules directory. Defaults to ./node_modules.
        resolver: Export resolver. Defaults to the shared one.

    Returns:
        ToolResult with the file contents or an error message.
    """
    status = verify_local_package(package_name, node_modules_root)
    if not status.exists:
        return ToolResult(
            success=False,
            output="",
            error=f'Package "{package_name}" not found locally. {status.error or ""}'.strip(),
        )

    try:
        modules = get_local_modules_map(package_name, node_modules_root)
    except PackageError as exc:
        return ToolResult(success=False, output="", error=str(exc))

    if component_name not in modules:
        return ToolResult(
            success=False,
            output="",
            error=(
                f'Component "{component_name}" not found in available modules '
                f'for package "{package_name}".'
            ),
        )

    resolver = resolver or get_default_resolver()
    record = await asyncio.to_thread(
        resolver.find_export_source, status.package_root, component_name
    )
    if record is None:
        return ToolResult(
            success=False,
            output="",
            error=(
                f'Failed to find source file for component "{component_name}" '
                f'in package "{package_name}".'
            ),
        )

    try:
        content = Path(record.file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return ToolResult(
            success=False,
            output="",
            error=f'Failed to read source code file for component "{component_name}": {exc}',
        )
    return ToolResult(success=True, output=content)


async def get_utility_classes(
    utility_name: str, node_modules_root: Path | str | None = None
) -> ToolResult:
    """Return the CSS file for a set of utility classes.

    Args:
        utility_name: One of the keys of UTILITY_CLASSES.
        node_modules_root: node_modules directory. Defaults to ./node_modules.

    Returns:
        ToolResult with the stylesheet or an error message.
    """
    relative = UTILITY_CLASSES.get(utility_name)
    if relative is None:
        return ToolResult(
            success=False,
            output="",
            error=(
                "Invalid or missing parameter: utilityName "
                f"(must be one of: {', '.join(UTILITY_CLASSES)}): {utility_name}"
            ),
        )

    status = verify_local_package(STYLES_PACKAGE, node_modules_root)
    if not status.exists:
        return ToolResult(
            success=False,
            output="",
            error=f'Package "{STYLES_PACKAGE}" not found locally. {status.error or ""}'.strip(),
        )

    full_path = Path(status.package_root) / relative
    try:
        content = full_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return ToolResult(
            success=False,
            output="",
            error=f'Failed to read utility classes file for "{utility_name}" at "{full_path}": {exc}',
        )
    return ToolResult(success=True, output=content)
