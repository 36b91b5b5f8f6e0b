# garmentZ: order intake, task tracking and sales analytics for a garments business
__version__ = "0.3.2"
