"""JSON parsing utilities"""
import json
import re
import logging
from typing import Optional, Any

logger = logging.getLogger(__name__)


def extract_json_from_response(content) -> Optional[Any]:
    """Extract JSON from response with multiple fallback strategies"""
    # Strategy 1: Direct parse if already dict or list
    if isinstance(content, (dict, list)):
        return content
    if not isinstance(content, str) or not content.strip():
        return None

    # Strategy 2: Try direct JSON parse
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    # Strategy 3: Find JSON in code blocks (most common from LLMs)
    json_block = re.search(r'```(?:json)?\s*([\s\S]*?)\s*```', content, re.DOTALL)
    if json_block:
        json_content = json_block.group(1).strip()
        if json_content:
            try:
                return json.loads(json_content)
            except json.JSONDecodeError as e:
                logger.warning(f"Error parsing JSON from code block: {e}")

    # Strategy 4: Find the first balanced object in surrounding text
    start = content.find('{')
    if start == -1:
        return None

    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(content)):
        char = content[i]

        if in_string:
            if escape:
                escape = False
            elif char == '\\':
                escape = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                try:
                    return json.loads(content[start:i + 1])
                except json.JSONDecodeError as e:
                    logger.warning(f"Error parsing JSON from text: {e}")
                    return None

    return None
