from .otel_tracer import *

TracerType = OTELTracer
