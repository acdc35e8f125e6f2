"""Generate the Gradle init script that prints resolved dependency files.

The script is templated only from a normalized configuration allow-list
and one boolean. Configuration names are emitted as single-quoted Groovy
strings, which Groovy never interpolates.
"""

from __future__ import annotations

from jar_viewer.dependencies.parsers.gradle_output import DEP_LINE_PREFIX

TASK_NAME = "jarViewerListDeps"
SCRIPT_NAME = "jar-viewer-init.gradle"

_GROOVY_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_TEMPLATE = """\
def jarViewerAllowedConfigs = {allowed}
def jarViewerExcludeTransitive = {exclude}
allprojects {{
  task {task} {{
    doLast {{
      configurations.each {{ config ->
        if (config.canBeResolved) {{
          if (!jarViewerAllowedConfigs.isEmpty() && !jarViewerAllowedConfigs.contains(config.name)) {{
            return
          }}
          def artifacts = []
          if (jarViewerExcludeTransitive) {{
            config.resolvedConfiguration.firstLevelModuleDependencies.each {{ dep ->
              dep.moduleArtifacts.each {{ art ->
                artifacts << art
              }}
            }}
          }} else {{
            artifacts = config.resolvedConfiguration.resolvedArtifacts
          }}
          artifacts.each {{ art ->
            def file = art.file
            if (file != null) {{
              println '{prefix}' + config.name + '|' + file.name + '|' + file.absolutePath
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""


def normalize_configurations(configurations: list[str] | None) -> list[str]:
    """Trimmed, non-empty, de-duplicated, sorted configuration names."""
    if not configurations:
        return []
    return sorted({c.strip() for c in configurations if c and c.strip()})


def groovy_string(value: str) -> str:
    """Single-quoted Groovy string literal for *value*."""
    escaped = "".join(_GROOVY_ESCAPES.get(ch, ch) for ch in value)
    escaped = "".join(ch if ch.isprintable() else f"\\u{ord(ch):04x}" for ch in escaped)
    return f"'{escaped}'"


def groovy_list(values: list[str] | None) -> str:
    normalized = normalize_configurations(values)
    return "[" + ", ".join(groovy_string(v) for v in normalized) + "]"


def render_init_script(configurations: list[str] | None, exclude_transitive: bool) -> str:
    return _TEMPLATE.format(
        allowed=groovy_list(configurations),
        exclude="true" if exclude_transitive else "false",
        task=TASK_NAME,
        prefix=DEP_LINE_PREFIX,
    )
