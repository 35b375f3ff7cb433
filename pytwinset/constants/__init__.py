from .constants import (R, MOLAR_VOLUME, CEL2KEL, MAX_PRESSURE, MAX_VOLUME, MIN_DEGC, MAX_DEGC, FRAC_TOL,
                        VdwConstant, VDW_CONSTANTS, MW_AR, MW_HE, MW_H2, MW_NE, MW_N2, MW_O2, MOLAR_MASS)
