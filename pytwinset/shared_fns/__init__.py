from .shared_fns import convert_to_numpy, process_output, celsius_to_kelvin
