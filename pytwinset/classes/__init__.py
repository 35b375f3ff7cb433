from .classes import gas_system, gas_kind, class_dic
