"""
Java interface generator for the runtime engine.

Introspects the public methods of an engine object and writes a single
``Engine`` interface with one Java method signature per supported method.
Methods are classified by arity (``self`` excluded):

- 2 parameters (context, args): a call taking the string arguments declared
  with ``@engine_method``;
- 4 parameters (context, function name, args, extra): the generic
  "invoke a named function with string arguments" shape.

Methods of any other arity are reported as skipped.
"""

import importlib.metadata
import inspect
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, Tuple, Union

from ...logging_config import get_logger
from ..core.config import GeneratorConfig
from ..core.file_writer import FileWriter
from ..core.generator import CodeGenerator, GenerationResult, GeneratorError
from ..core.templates import TemplateEngine

logger = get_logger(__name__)

CHECKED_EXCEPTION = "ComposerException"
ARGUMENTS_ARITY = 2
NAMED_FUNCTION_ARITY = 4

# First bracketed list made only of quoted names, e.g. ['registryType', 'registryId']
_PARAMETER_LIST = re.compile(r"""\[\s*((?:(['"])[^'"]*\2\s*,?\s*)*)\]""")
_QUOTED_NAME = re.compile(r"""['"]([^'"]+)['"]""")


def to_camel_case(value: str) -> str:
    """Convert snake_case (or already camelCase) text to camelCase."""
    parts = [part for part in value.split("_") if part]
    if not parts:
        return value
    head, tail = parts[0], parts[1:]
    return head[0].lower() + head[1:] + "".join(p[0].upper() + p[1:] for p in tail)


def extract_parameter_list(source: str) -> str:
    """
    Rebuild a Java parameter list from a method's source text.

    Finds the first bracketed list of quoted names and turns each name into a
    ``String`` parameter. Returns an empty string when there is no such list.
    """
    match = _PARAMETER_LIST.search(source)
    if match is None:
        return ""
    return _QUOTED_NAME.sub(r"String \1", match.group(1)).strip().rstrip(",").strip()


@dataclass(frozen=True)
class MethodSignature:
    """Shape of one public engine method. ``arity`` is None when it cannot be read."""

    name: str
    arity: Optional[int]
    parameters: Optional[Tuple[str, ...]]
    function: Callable[..., Any]

    @property
    def java_name(self) -> str:
        return to_camel_case(self.name)


def _unwrap(member) -> Tuple[Callable[..., Any], int]:
    """The underlying callable and the number of leading bound parameters."""
    if isinstance(member, staticmethod):
        return member.__func__, 0
    if isinstance(member, classmethod):
        return member.__func__, 1
    if inspect.isfunction(member):
        return member, 1
    return member, 0


def describe_methods(engine) -> Iterator[MethodSignature]:
    """
    Yield the public callables defined directly on the engine's class.

    Methods come in definition order. Private names, nested classes and
    non-callable members are skipped. Static and class methods are unwrapped;
    ``self`` and ``cls`` do not count toward the arity.
    """
    owner = engine if inspect.isclass(engine) else type(engine)
    for name, member in vars(owner).items():
        if name.startswith("_") or inspect.isclass(member):
            continue
        if not (callable(member) or isinstance(member, (staticmethod, classmethod))):
            continue

        function, bound = _unwrap(member)
        try:
            arity = len(inspect.signature(function).parameters) - bound
        except (TypeError, ValueError):
            arity = None

        declared = getattr(member, "engine_parameters", None)
        if declared is None:
            declared = getattr(function, "engine_parameters", None)
        yield MethodSignature(
            name=name,
            arity=arity,
            parameters=tuple(declared) if declared is not None else None,
            function=function,
        )


def resolve_runtime_version(config: GeneratorConfig) -> str:
    """
    Version written into the interface's version constant.

    ``runtime_version`` wins; otherwise the installed version of
    ``runtime_distribution``, which defaults to this package itself, so the
    constant reports the generator release unless configured otherwise.
    """
    if config.runtime_version:
        return config.runtime_version
    try:
        return importlib.metadata.version(config.runtime_distribution)
    except importlib.metadata.PackageNotFoundError:
        from ... import __version__

        logger.debug(
            "Distribution %s is not installed; using package version %s",
            config.runtime_distribution,
            __version__,
        )
        return __version__


class EngineGenerator(CodeGenerator):
    """Generates the Java ``Engine`` interface from an engine object."""

    def __init__(
        self,
        engine,
        config: Optional[GeneratorConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        super().__init__(config, template_engine)
        self.engine = engine

    @property
    def file_name(self) -> str:
        return self.config.engine_interface + self.file_extension

    def generate(
        self,
        output_dir: Union[str, Path, None] = None,
        file_writer: Optional[FileWriter] = None,
    ) -> GenerationResult:
        """
        Write the engine interface file.

        Args:
            output_dir: Directory receiving the interface file
            file_writer: Existing file sink to write through instead of output_dir

        Returns:
            GenerationResult with the written file and any skipped methods
        """
        if file_writer is None:
            if output_dir is None:
                raise ValueError("Either output_dir or file_writer must be provided")
            file_writer = self.create_file_writer(output_dir)

        version = resolve_runtime_version(self.config)
        result = GenerationResult(
            metadata={
                "language": self.language_name,
                "interface": self.config.engine_interface,
                "runtime_version": version,
            }
        )

        logger.info("generating %s", self.file_name)
        file_writer.open_file(self.file_name)
        try:
            self.write_file_header(file_writer, self.config.engine_package)
            file_writer.write_line(0, f"public interface {self.config.engine_interface} {{")
            file_writer.write_line(
                1, f'String {self.config.engine_version_constant} = "{version}";'
            )

            for signature in describe_methods(self.engine):
                self.write_method(file_writer, signature, result)

            file_writer.write_line(0, "}")
        except Exception:
            file_writer.discard()
            raise

        result.files.append(file_writer.close_file())
        return result

    def write_method(
        self, file_writer: FileWriter, signature: MethodSignature, result: GenerationResult
    ) -> None:
        if signature.arity == ARGUMENTS_ARITY:
            parameters = self.parameter_list(signature)
            file_writer.write_line(
                1,
                f"String {signature.java_name}({parameters}) throws {CHECKED_EXCEPTION};",
            )
        elif signature.arity == NAMED_FUNCTION_ARITY:
            file_writer.write_line(
                1,
                f"String {signature.java_name}(String func, String[] args) "
                f"throws {CHECKED_EXCEPTION};",
            )
        else:
            if signature.arity is None:
                message = f"Method {signature.name} has no readable signature"
            else:
                message = (
                    f"Method {signature.name} takes {signature.arity} argument(s); "
                    f"only {ARGUMENTS_ARITY} or {NAMED_FUNCTION_ARITY} are supported"
                )
            logger.warning(message)
            result.skipped.append(signature.name)
            result.warnings.append(message)

    def parameter_list(self, signature: MethodSignature) -> str:
        """Java parameters for a two-argument method."""
        if signature.parameters is not None:
            return ", ".join(f"String {name}" for name in signature.parameters)

        logger.warning(
            "Method %s declares no engine parameters; reading them from its source",
            signature.name,
        )
        try:
            source = inspect.getsource(signature.function)
        except (OSError, TypeError) as e:
            raise GeneratorError(
                f"Cannot read the source of engine method {signature.name}: {e}"
            ) from e
        return extract_parameter_list(source)
