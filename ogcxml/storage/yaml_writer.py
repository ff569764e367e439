"""YAML writer for parsed capabilities documents."""

import io
from pathlib import Path

import ruamel.yaml
from ruamel.yaml.scalarstring import LiteralScalarString

from ogcxml.ogc.capabilities import OGCCapabilities
from ogcxml.ogc.capability import OGCCapabilityInformation, OGCRequestDescription
from ogcxml.ogc.service import OGCContactInformation, OGCServiceInformation


def _format_text(text: str | None) -> str | LiteralScalarString | None:
    """Use a literal block scalar for multiline text."""
    if text is not None and "\n" in text:
        return LiteralScalarString(text)
    return text


def _contact_to_dict(contact: OGCContactInformation) -> dict:
    """Convert contact information to a dictionary with only the fields that are set."""
    candidates = {
        "person": contact.person,
        "organization": contact.organization,
        "position": contact.position,
        "city": contact.city,
        "country": contact.country,
        "voice_telephone": contact.voice_telephone,
        "email": contact.email,
    }
    return {key: value for key, value in candidates.items() if value is not None}


def _service_to_dict(service: OGCServiceInformation) -> dict:
    result = {
        "name": service.name,
        "title": service.title,
    }
    if service.abstract:
        result["abstract"] = _format_text(service.abstract)
    if service.keywords:
        result["keywords"] = service.keywords
    if service.online_resource is not None and service.online_resource.href:
        result["online_resource"] = service.online_resource.href
    if service.fees:
        result["fees"] = service.fees
    if service.access_constraints:
        result["access_constraints"] = service.access_constraints

    for key, value in (
        ("layer_limit", service.layer_limit),
        ("max_width", service.max_width),
        ("max_height", service.max_height),
    ):
        if value is not None:
            result[key] = value

    if service.contact_information is not None:
        contact = _contact_to_dict(service.contact_information)
        if contact:
            result["contact"] = contact
    return result


def _request_to_dict(request: OGCRequestDescription) -> dict:
    result = {
        "name": request.request_name,
        "formats": list(request.formats),
    }
    if request.endpoints:
        result["endpoints"] = [
            {"method": endpoint.method, "href": endpoint.href}
            for endpoint in request.endpoints
        ]
    return result


def _capability_to_dict(capability: OGCCapabilityInformation) -> dict:
    return {
        "requests": [_request_to_dict(r) for r in capability.request_descriptions],
        "exception_formats": list(capability.exception_formats),
    }


def generate_yaml_dict(capabilities: OGCCapabilities) -> dict:
    """Generate a dictionary from a parsed capabilities document.

    Args:
        capabilities: The parsed document

    Returns:
        Dictionary ready for YAML serialization
    """
    result = {
        "version": capabilities.version,
        "update_sequence": capabilities.update_sequence,
    }
    if capabilities.service_information is not None:
        result["service"] = _service_to_dict(capabilities.service_information)
    if capabilities.capability_information is not None:
        result["capability"] = _capability_to_dict(capabilities.capability_information)
    return result


def save_yaml(capabilities: OGCCapabilities, output_file: Path) -> Path:
    """Save a parsed capabilities document as a YAML file.

    Args:
        capabilities: The parsed document
        output_file: Path of the file to write; parent directories are created

    Returns:
        Path to the saved file
    """
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    yaml_dict = generate_yaml_dict(capabilities)

    yaml = ruamel.yaml.YAML()
    yaml.default_flow_style = False
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = 100
    yaml.explicit_start = True

    # ruamel.yaml leaves trailing spaces after wrapped long values
    buffer = io.StringIO()
    yaml.dump(yaml_dict, buffer)
    content = "\n".join(line.rstrip() for line in buffer.getvalue().splitlines()) + "\n"

    with open(output_file, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)

    return output_file
