from .cylinder import Cylinder, CylinderList, CylinderConfiguration, initialize_cylinders
