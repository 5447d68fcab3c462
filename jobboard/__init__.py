"""Job board backend: employers post jobs, job seekers apply, admins report."""
