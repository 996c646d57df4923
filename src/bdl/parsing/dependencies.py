"""
Dependency validation.

A document declares the files it may transfer control into through the
``Required`` metadata key. Declarations must carry the dialog file extension
and must not repeat; file-transfer destinations must name one of them.
"""

from bdl.config import DEFAULT_CONFIG, ParserConfig
from bdl.core.types import DependencySet
from bdl.exceptions import DependencyError, DependencyIssue


def validate_dependency_file(file: str, config: ParserConfig | None = None) -> None:
    """
    Check that a file name has the dialog file extension.

    Params:
        file: Dependency file name
        config: Parser settings providing the extension

    Raises:
        DependencyError: If the name does not end with the extension
    """
    config = config or DEFAULT_CONFIG
    if not file.endswith(config.extension):
        raise DependencyError(file, DependencyIssue.EXTENSION)


def validate_dependencies(
    declared: list[str], config: ParserConfig | None = None
) -> DependencySet:
    """
    Validate the declared dependency list.

    Params:
        declared: File names in declaration order
        config: Parser settings providing the extension

    Returns:
        Set of validated file names

    Raises:
        DependencyError: On an invalid extension or a repeated declaration
    """
    validated: set[str] = set()

    for file in declared:
        validate_dependency_file(file, config)
        if file in validated:
            raise DependencyError(file, DependencyIssue.DUPLICATE)
        validated.add(file)

    return frozenset(validated)


def validate_file_transfer(
    file: str, dependencies: DependencySet, config: ParserConfig | None = None
) -> None:
    """
    Check that a file-transfer target is a declared dependency.

    Params:
        file: Target file of a ``[file.bdl:node]`` destination
        dependencies: Validated dependency set of the same document
        config: Parser settings providing the extension

    Raises:
        DependencyError: If the extension is wrong or the file is undeclared
    """
    validate_dependency_file(file, config)
    if file not in dependencies:
        raise DependencyError(file, DependencyIssue.UNDECLARED)
