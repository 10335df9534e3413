"""README.md templates for new Node and Go projects."""

from __future__ import annotations

from dataclasses import dataclass, field

from pkg_cmd.core.init.models import Language

GO_README = """\
# {name}

> {description}

## Install

To install {name}, run:

```sh
go get {name}
```

{badges}

## Usage

```go
```

## API

---

## License

Released under the {license_name}. See file [LICENSE](./LICENSE) for more details.
"""

NODE_README = """\
# {name}

> {description}

## Install

To install {name}, run:

```sh
npm install {name}
```

{badges}

## Usage

```js
import {name} from '{name}';
```

## API


---

## License

Released under the {license_name}. See file [LICENSE](./LICENSE) for more details.
"""


@dataclass(frozen=True)
class ReadmeContext:
    """Values substituted into the README template."""

    name: str
    description: str
    license_name: str
    # Always empty for now
    badges: list[str] = field(default_factory=list)


def render_readme(language: Language, context: ReadmeContext) -> str:
    """Render the README for ``language``."""
    template = GO_README if language is Language.GO else NODE_README
    return template.format(
        name=context.name,
        description=context.description,
        badges="\n".join(context.badges),
        license_name=context.license_name,
    )
