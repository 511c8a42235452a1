from src.link_audit.audit import run_link_audit

# python -m src.link_audit
if __name__ == "__main__":
    scan, fix_report = run_link_audit(
        enable_fix=False,
        db_path="artifacts/content/site.db",
        report_dir="artifacts/reports",
        target_urls=None,
    )
    print(scan.summary)
    if fix_report is not None:
        print(fix_report.to_dict()["summary"])
