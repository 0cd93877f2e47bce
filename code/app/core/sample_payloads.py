SAMPLE_FORM = {
    "dbSpend": 250000,
    "dbtSpend": 40000,
    "teamSize": 10,
    "stakeholders": 20,
    "dataProducts": 15,
    "modelTime": 30,
    "reworkPercent": 15,
    "revisionPercent": 20,
    "currentTools": "excel",
    "industry": "technology",
    "companySize": "medium",
    "region": "americas",
    "usesCICD": False,
    "usesGovernance": False,
    "cloudOnly": False,
    "firstName": "Dana",
    "lastName": "Reyes",
    "businessEmail": "dana.reyes@acme-analytics.com",
    "company": "Acme Analytics",
    "jobTitle": "Head of Data Platform",
}

# Values the wizard starts from before the visitor edits anything.
DEFAULT_FORM = {
    "dbSpend": 0,
    "dbtSpend": 0,
    "teamSize": 5,
    "stakeholders": 10,
    "dataProducts": 10,
    "modelTime": 30,
    "reworkPercent": 15,
    "revisionPercent": 20,
    "currentTools": "other",
    "industry": "other",
    "companySize": "medium",
    "region": "americas",
    "usesCICD": False,
    "usesGovernance": False,
    "cloudOnly": False,
    "firstName": "",
    "lastName": "",
    "businessEmail": "",
    "company": "",
    "jobTitle": "",
}
