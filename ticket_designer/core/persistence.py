# ticket_designer/core/persistence.py
"""
Project persistence: save / load ticket projects as JSON, with embedded
images exported next to the JSON in an ``image/`` folder.

Layout on disk (and inside an archive)::

    <name>.json
    image/<variableName stem>.<ext>
"""
from __future__ import annotations

import json
import logging
import os
import zipfile
from typing import Dict, List, Tuple

from .exceptions import map_exception
from .models import KIND_IMAGE, TicketProject
from .utils import decode_image_data_uri, image_file_stem, is_image_data_uri

logger = logging.getLogger(__name__)

IMAGE_DIR = "image"


def project_file_name(project: TicketProject) -> str:
    return f"{project.name or 'TicketProject'}.json"


def project_json(project: TicketProject) -> str:
    return json.dumps(project.to_dict(), indent=2, ensure_ascii=False)


def collect_images(project: TicketProject) -> List[Tuple[str, bytes]]:
    """
    ``(file_name, data)`` for every image element carrying an embedded
    data URI. Malformed payloads are skipped.
    """
    out: List[Tuple[str, bytes]] = []
    for elem in project.elements:
        if elem.kind != KIND_IMAGE or not is_image_data_uri(elem.content):
            continue
        decoded = decode_image_data_uri(elem.content)
        if decoded is None:
            logger.warning("Skipping image %s: payload is not valid base64", elem.id)
            continue
        data, ext = decoded
        out.append((f"{image_file_stem(elem.variable_name, elem.id)}.{ext}", data))
    return out


def save_project(project: TicketProject, directory: str) -> str:
    """
    Write the project JSON and its images into *directory*.

    Returns the path of the JSON file. Raises ProjectError on failure.
    """
    try:
        os.makedirs(directory, exist_ok=True)
        json_path = os.path.join(directory, project_file_name(project))
        with open(json_path, "w", encoding="utf-8") as f:
            f.write(project_json(project))

        images = collect_images(project)
        if images:
            img_dir = os.path.join(directory, IMAGE_DIR)
            os.makedirs(img_dir, exist_ok=True)
            for name, data in images:
                with open(os.path.join(img_dir, name), "wb") as f:
                    f.write(data)
    except Exception as e:
        raise map_exception(e) from e

    logger.info("Saved project %r to %s (%d image(s))", project.name, json_path, len(images))
    return json_path


def save_project_archive(project: TicketProject, path: str) -> str:
    """Same layout as save_project, packed into a single zip file."""
    try:
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(project_file_name(project), project_json(project))
            for name, data in collect_images(project):
                zf.writestr(f"{IMAGE_DIR}/{name}", data)
    except Exception as e:
        raise map_exception(e) from e

    logger.info("Saved project archive %s", path)
    return path


def project_from_json(text: str) -> TicketProject:
    try:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("Unrecognized project format: top level is not an object")
        return TicketProject.from_dict(data)
    except Exception as e:
        raise map_exception(e) from e


def load_project(path: str) -> TicketProject:
    """Read a project JSON file. Raises ProjectError on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except Exception as e:
        raise map_exception(e) from e

    project = project_from_json(text)
    logger.info("Loaded project %r from %s (%d element(s))", project.name, path, len(project.elements))
    return project


def element_counts(project: TicketProject) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for e in project.elements:
        counts[e.kind] = counts.get(e.kind, 0) + 1
    return counts
