from attrs import frozen


@frozen
class ParserConfig:
    """Settings shared by the parser, validator and loader.

    Attributes:
      - extension: Required suffix of every dependency file name.
      - entry_file: The only file allowed to declare `$global_vars`.
      - encoding: Text encoding used when reading documents from disk.
    """

    extension: str = ".bdl"
    entry_file: str = "main.bdl"
    encoding: str = "utf-8"


DEFAULT_CONFIG = ParserConfig()
