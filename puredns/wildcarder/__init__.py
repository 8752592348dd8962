"""Detection and filtering of wildcard subdomains."""