#!/usr/bin/env python3
"""
Path helpers for deriving target-culture file paths.

Multi-part extensions such as ".i18n.json" are treated as one extension,
so "app.en.i18n.json" has the name "app.en" and extension ".i18n.json".
"""

import os

MULTI_PART_EXTENSIONS = (
    '.i18n.json',
    '.designer.vb',
)


def get_extension(file_path: str) -> str:
    """Extension with leading dot, multi-part aware ("" if none)."""
    file_name = os.path.basename(file_path)
    lower = file_name.lower()
    for multi_part in MULTI_PART_EXTENSIONS:
        if lower.endswith(multi_part):
            return multi_part
    return os.path.splitext(file_name)[1]


def get_name_without_extension(file_path: str) -> str:
    """File name without its (possibly multi-part) extension."""
    file_name = os.path.basename(file_path)
    lower = file_name.lower()
    for multi_part in MULTI_PART_EXTENSIONS:
        if lower.endswith(multi_part):
            return file_name[:-len(multi_part)]
    return os.path.splitext(file_name)[0]


def target_file_name(file_path: str, source_culture: str, target_culture: str) -> str:
    """
    Swap the culture in a file name.

    "app.en.json" -> "app.tr.json", "en.json" -> "tr.json",
    "strings.json" -> "strings.tr.json".
    """
    extension = get_extension(file_path)
    name = get_name_without_extension(file_path)
    suffix = f".{source_culture}"

    if name.lower().endswith(suffix.lower()):
        return f"{name[:-len(suffix)]}.{target_culture}{extension}"
    if name.lower() == source_culture.lower():
        return f"{target_culture}{extension}"
    return f"{name}.{target_culture}{extension}"


def generate_target_path(
    source_file_path: str,
    input_path: str,
    output_path: str,
    source_culture: str,
    target_culture: str,
) -> str:
    """
    Build the output path for a target culture, creating missing directories.

    Args:
        source_file_path: The base-culture file being processed
        input_path: What the caller passed in (a single file or a directory)
        output_path: Output root
        source_culture: Base culture code
        target_culture: Target culture code

    Returns:
        Target file path under output_path
    """
    file_name = target_file_name(source_file_path, source_culture, target_culture)

    # Anything that is not a directory is treated as a single input file
    if not os.path.isdir(input_path):
        relative_path = file_name
    else:
        source_dir = os.path.dirname(source_file_path) or '.'
        relative_dir = os.path.relpath(source_dir, input_path)
        relative_path = os.path.normpath(os.path.join(relative_dir, file_name))

    target_path = os.path.join(output_path, relative_path)

    target_dir = os.path.dirname(target_path)
    if target_dir and not os.path.isdir(target_dir):
        os.makedirs(target_dir, exist_ok=True)

    return target_path
