from . import _base
from . import _context
from . import _decorate
from . import _metadata
from . import _pipeline
from . import _private
from . import _register

Exception = _base.Exception  # noqa
AlreadyPublishedError = _base.AlreadyPublishedError
DecorationFinishedError = _base.DecorationFinishedError
Kind = _base.Kind
Symbol = _base.Symbol

Access = _context.Access
Context = _context.Context

Accessor = _decorate.Accessor
AccessorValue = _decorate.AccessorValue
Decorate = _decorate.Decorate

Metadata = _metadata.Metadata

Base = _pipeline.Base
Meta = _pipeline.Meta
Pipeline = _pipeline.Pipeline
define = _pipeline.define

Private = _private.Private

Register = _register.Register
global_register = _register.global_register
metadata_of = _register.metadata_of
