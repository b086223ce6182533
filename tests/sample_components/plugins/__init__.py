from registrar.descriptors import register_on_start
from registrar.domain import Marker


@register_on_start
class SamplePlugin(Marker):
    pass
