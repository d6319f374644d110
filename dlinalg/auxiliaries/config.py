"""Module for reading and validating run configurations"""
import os.path
import sys

import configobj
import validate

CONFIGSPEC = os.path.join(os.path.dirname(__file__), "configspec")


class CfgException(Exception):
    pass


def get_cfg(cfg_file_name="Parameters.in", kvargs={}, err=sys.stderr):
    """ Parse a config """
    def is_sci_integer(value, min=None):
        """Integer check for validate that also accepts e.g. 1e3"""
        try:
            i = int(value)
        except ValueError:
            try:
                fval = float(value)
                i = int(fval)
            except (ValueError, OverflowError):
                raise validate.VdtTypeError(value)
            if fval != i:
                raise validate.VdtTypeError(value)
        if min is not None and i < int(min):
            raise validate.VdtValueTooSmallError(value)
        return i

    if not os.path.isfile(cfg_file_name):
        err.write("error: config file not found: %s\n" % cfg_file_name)
        raise CfgException("config file not found: %s" % cfg_file_name)

    with open(CONFIGSPEC, 'r') as specfile:
        configspec = specfile.readlines()
    cfg = configobj.ConfigObj(infile=cfg_file_name, configspec=configspec,
                              indent_type="\t")

    # update command line parameters
    for key, value in kvargs.items():
        groups = key.split(".")
        parent = cfg
        for group in groups[:-1]:
            parent = parent.setdefault(group, {})
        parent[groups[-1]] = value

    validator = validate.Validator()
    validator.functions["integer"] = is_sci_integer
    valid = cfg.validate(validator, copy=True)

    pairs = configobj.get_extra_values(cfg)
    if pairs:
        err.write("error: unknown entries in config: %s\n" % cfg_file_name)
        err.write(">>> %s\n" % ", ".join(".".join(e[0] + (e[1],))
                                         for e in pairs))
        raise CfgException("unknown entries in config")

    if valid is not True:
        err.write("error: invalid entries in config: %s\n" % cfg_file_name)
        err.write(">>> %s\n" % ", ".join(str(entry) for entry, ok
                                         in flat_items(valid) if not ok))
        raise CfgException("invalid entries in config")

    return cfg


# --------- helper routines -----------

def flat_items(d, prefix=""):
    items = []
    for k, v in d.items():
        fullk = prefix + k
        if isinstance(v, dict):
            items.extend(flat_items(v, fullk + "."))
        else:
            items.append((fullk, v))
    return items


def parse_pairs(argv):
    """Extracts all key=value pairs from the argument vector"""
    kv_opts = {}
    clean_args = []
    for iarg, arg in enumerate(argv):
        # rules to be consistent with getopt/optparse's option parsing rules
        if arg == "--":
            clean_args.extend(argv[iarg:])
            break
        elif arg[0] in ("-", "+") or arg.find("=") < 1:
            clean_args.append(arg)
        else: # a key/value-pair
            eqpos = arg.find("=")
            kv_opts[arg[:eqpos].strip()] = arg[eqpos+1:].strip()
    return kv_opts, clean_args
